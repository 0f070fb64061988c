"""Escaping of literal text for the Markdown renderer."""

from __future__ import annotations

from .constants import MARKDOWN_SPECIAL_PATTERN


def escape_markdown(text: str) -> str:
    r"""Backslash-escape Markdown-significant characters in literal text.

    Only ``- _ * + ` . #`` are escaped; every other character is returned
    unchanged.

    Args:
        text: Literal character data from the document.

    Returns:
        str: Text the renderer will display verbatim.

    Examples:
        escape_markdown("1. item")  # "1\\. item"
        escape_markdown("__init__")  # "\\_\\_init\\_\\_"
    """
    return MARKDOWN_SPECIAL_PATTERN.sub(r"\\\1", text)
