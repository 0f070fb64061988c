from __future__ import annotations

import string
from xml.sax.saxutils import escape as xml_escape

from hypothesis import given
from hypothesis import strategies as st

from xml_to_markdown.constants import MARKDOWN_SPECIAL_CHARS
from xml_to_markdown.converter import MarkdownConverter
from xml_to_markdown.escape import escape_markdown

literal_text = st.text(
    alphabet=string.ascii_letters + string.digits + " <>&" + MARKDOWN_SPECIAL_CHARS,
    max_size=64,
)


def _unescape(text: str) -> str:
    result = []
    chars = iter(text)
    for char in chars:
        if char == "\\":
            char = next(chars)
        result.append(char)
    return "".join(result)


@given(st.text(alphabet=st.characters(exclude_characters="\\")))
def test_every_special_character_is_escaped(text: str):
    escaped = escape_markdown(text)

    assert _unescape(escaped) == text
    for index, char in enumerate(escaped):
        if char in MARKDOWN_SPECIAL_CHARS:
            assert escaped[index - 1] == "\\"


@given(st.text(alphabet=string.ascii_letters + string.digits + " ,;:!?()[]"))
def test_other_characters_are_untouched(text: str):
    assert escape_markdown(text) == text


@given(literal_text)
def test_paragraph_text_is_escaped(text: str):
    converter = MarkdownConverter()
    markdown = converter.to_markdown(f"<Para>{xml_escape(text)}</Para>")

    assert markdown == escape_markdown(text).strip()


@given(st.lists(literal_text, min_size=1, max_size=5))
def test_bullet_list_has_one_line_per_item(items: list[str]):
    items = [item.strip() or "x" for item in items]
    body = "".join(f"<Item><Para>{xml_escape(item)}</Para></Item>" for item in items)
    converter = MarkdownConverter()

    markdown = converter.to_markdown(f"<List-Bullet>{body}</List-Bullet>")

    assert markdown.split("\n") == [f"- {escape_markdown(item)}" for item in items]


@given(st.text(max_size=200))
def test_conversion_is_deterministic(content: str):
    converter = MarkdownConverter(on_error=lambda message: None)

    first = converter.to_markdown(content)
    second = converter.to_markdown(content)

    assert first == second


@given(st.text(max_size=200))
def test_arbitrary_input_never_raises(content: str):
    errors: list[str] = []
    converter = MarkdownConverter(on_error=errors.append)

    converter.to_markdown(f"<Outer>{content}</Outer>")
