"""Constants used across the xml-to-markdown package."""

from __future__ import annotations

import re

# Characters the renderer treats as Markdown syntax in plain text runs
MARKDOWN_SPECIAL_CHARS = "-_*+`.#"
MARKDOWN_SPECIAL_PATTERN = re.compile(f"([{re.escape(MARKDOWN_SPECIAL_CHARS)}])")

CODE_FENCE = "```"
HORIZONTAL_RULE = "---"
BULLET_MARKER = "- "
# The renderer numbers ordered lists itself
NUMBER_MARKER = "1. "

DEFAULT_INDENT_WIDTH = 4
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

# Raw HTML fragments passed through CDATA. Attribute order is fixed upstream.
IMG_TAG_PATTERN = re.compile(r'<img src="(.*?)"(?: title="(.*?)")?(?: alt="(.*?)")?/>')
HR_TAG = "<hr/>"
HEADING_TAG_PATTERN = re.compile(r"<(/)?h([1-6])>")

# Diagnostics quote at most this much of the offending document
ERROR_FRAGMENT_LENGTH = 80
