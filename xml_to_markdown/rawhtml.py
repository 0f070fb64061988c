"""Recognition of the raw HTML fragments emitted inside CDATA blocks.

The upstream tool renders images, horizontal rules and headings as HTML
rather than documentation elements. Only that fixed vocabulary is matched.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import HEADING_TAG_PATTERN, HR_TAG, IMG_TAG_PATTERN


@dataclass(frozen=True)
class HeadingTag:
    """A heading tag found in raw HTML.

    Attributes:
        level: Heading level, 1 to 6.
        closing: True for ``</hN>``.
    """

    level: int
    closing: bool = False

    def to_markdown(self) -> str:
        if self.closing:
            return ""
        return "#" * self.level + " "


def parse_image_link(html: str) -> str | None:
    """Translate an ``<img/>`` tag into a Markdown image.

    Args:
        html: Raw HTML from a CDATA block.

    Returns:
        str | None: ``![alt](src "title")`` with the alt text and title left
            out when absent, or None when `html` is not an image tag.

    Examples:
        parse_image_link('<img src="a.png"/>')  # "![](a.png)"
        parse_image_link('<img src="a.png" title="T" alt="A"/>')  # '![A](a.png "T")'
    """
    match = IMG_TAG_PATTERN.fullmatch(html)
    if not match:
        return None

    src, title, alt = match.groups()
    image = f"![{alt or ''}]({src}"
    if title is not None:
        image += f' "{title}"'
    return image + ")"


def is_horizontal_rule(html: str) -> bool:
    return html == HR_TAG


def parse_heading(html: str) -> HeadingTag | None:
    """Recognize an opening or closing heading tag.

    Args:
        html: Raw HTML from a CDATA block.

    Returns:
        HeadingTag | None: The tag, or None when `html` is not ``<hN>`` or
            ``</hN>``.

    Examples:
        parse_heading("<h2>")  # HeadingTag(level=2, closing=False)
        parse_heading("</h2>")  # HeadingTag(level=2, closing=True)
    """
    match = HEADING_TAG_PATTERN.fullmatch(html)
    if not match:
        return None
    return HeadingTag(level=int(match.group(2)), closing=match.group(1) is not None)
