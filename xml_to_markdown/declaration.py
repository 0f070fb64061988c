"""Extraction of declaration records from documentation XML.

Both clients understand the outer documentation schema and leave all prose
formatting to `MarkdownConverter`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from enum import Enum

from .config import ConverterConfig
from .converter import ElementDone, MarkdownConverter
from .models import Declaration, Parameter


class SchemaElement(Enum):
    """Documentation schema elements the declaration clients look for."""

    NAME = "Name"
    USR = "USR"
    DECLARATION = "Declaration"
    DISCUSSION = "Discussion"
    PARAMETER = "Parameter"
    RESULT_DISCUSSION = "ResultDiscussion"

    @classmethod
    def from_tag(cls, tag: str) -> SchemaElement | None:
        try:
            return cls(tag)
        except ValueError:
            return None


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class DeclarationBuilder:
    """Collect an entire `Declaration` while the converter walks a document.

    The outermost element names the declaration kind and supplies the source
    location. The top-level ``Discussion`` is not part of the record.

    Attributes:
        declaration: The record filled in so far.
    """

    def __init__(self):
        self.declaration = Declaration()
        self._parameter: Parameter | None = None
        self._seen_root = False

    def did_start_element(
        self, name: str, attributes: dict[str, str], converter: MarkdownConverter
    ) -> ElementDone | None:
        if not self._seen_root:
            self._seen_root = True
            self.declaration = replace(
                self.declaration,
                kind=name,
                file=attributes.get("file"),
                line=_parse_int(attributes.get("line")),
                column=_parse_int(attributes.get("column")),
            )

        element = SchemaElement.from_tag(name)
        if element is None:
            return None

        if element is SchemaElement.USR:
            return self._capture_text(converter, lambda text: self._update(usr=text))

        if element is SchemaElement.DECLARATION:
            return self._capture_text(converter, lambda text: self._update(declaration=text))

        if element is SchemaElement.NAME:
            return self._capture_text(converter, self._set_name)

        if element is SchemaElement.PARAMETER:
            self._parameter = Parameter()
            return self._end_parameter

        if element is SchemaElement.DISCUSSION:
            if self._parameter is None:
                return None
            converter.start_markdown()

            def discussion_done() -> None:
                markdown = converter.end_markdown()
                if self._parameter is not None:
                    self._parameter = replace(self._parameter, discussion=markdown)

            return discussion_done

        # ResultDiscussion
        converter.start_markdown()
        return lambda: self._update(result_discussion=converter.end_markdown())

    def _capture_text(
        self, converter: MarkdownConverter, store: Callable[[str], None]
    ) -> ElementDone:
        converter.start_text()
        return lambda: store(converter.end_text().strip())

    def _set_name(self, text: str) -> None:
        if self._parameter is not None:
            self._parameter = replace(self._parameter, name=text)
        else:
            self._update(name=text)

    def _end_parameter(self) -> None:
        if self._parameter is None:
            return
        self._update(parameters=(*self.declaration.parameters, self._parameter))
        self._parameter = None

    def _update(self, **changes: object) -> None:
        self.declaration = replace(self.declaration, **changes)


class DeclarationExtractor:
    """Pick out only the ``Declaration`` text, stopping the parse once found.

    Attributes:
        declaration: The signature text, or None until it has been seen.
    """

    def __init__(self):
        self.declaration: str | None = None

    def did_start_element(
        self, name: str, attributes: dict[str, str], converter: MarkdownConverter
    ) -> ElementDone | None:
        if SchemaElement.from_tag(name) is not SchemaElement.DECLARATION:
            return None

        converter.start_text()

        def declaration_done() -> None:
            self.declaration = converter.end_text()
            converter.abort()

        return declaration_done


def build_declaration(
    xml: str | bytes,
    on_error: Callable[[str], None] | None = None,
    config: ConverterConfig | None = None,
) -> Declaration:
    """Extract the full declaration record from a documentation XML document.

    Args:
        xml: Documentation XML for one declaration.
        on_error: Optional callback receiving tokenizer failure messages.
        config: Converter configuration.

    Returns:
        Declaration: The record. Fields whose elements are missing keep their
            default values.

    Raises:
        MalformedXMLError: If the document is malformed and `config` is strict.

    Examples:
        build_declaration('<Function line="3"><Name>f()</Name></Function>').name  # "f()"
    """
    builder = DeclarationBuilder()
    converter = MarkdownConverter(on_error=on_error, config=config)
    converter.convert(xml, client=builder)
    return builder.declaration


def extract_declaration(
    xml: str | bytes,
    on_error: Callable[[str], None] | None = None,
    config: ConverterConfig | None = None,
) -> str | None:
    """Extract only the ``Declaration`` text from a documentation XML document.

    Parsing stops as soon as the element closes.

    Args:
        xml: Documentation XML for one declaration.
        on_error: Optional callback receiving tokenizer failure messages.
        config: Converter configuration.

    Returns:
        str | None: The declaration text, or None when the document has none.

    Examples:
        extract_declaration("<Class><Declaration>class A</Declaration></Class>")  # "class A"
    """
    extractor = DeclarationExtractor()
    converter = MarkdownConverter(on_error=on_error, config=config)
    converter.convert(xml, client=extractor)
    return extractor.declaration
