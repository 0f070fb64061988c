"""Streaming conversion of documentation-comment XML into Markdown.

The tokenizer delivers a flat stream of element, text and CDATA events while
the Markdown grammar is hierarchical. Every element open pushes the action to
run when that element closes (or None) onto a stack, and every close pops and
runs it, which recovers the nesting without building a tree.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol
from xml.parsers import expat

from .config import ConverterConfig, validate_config
from .constants import (
    BULLET_MARKER,
    CODE_FENCE,
    ERROR_FRAGMENT_LENGTH,
    HORIZONTAL_RULE,
    NUMBER_MARKER,
)
from .escape import escape_markdown
from .exceptions import MalformedXMLError
from .models import (
    CaptureMode,
    CaptureSession,
    ConverterContext,
    ElementKind,
    Indent,
    ListKind,
)
from .rawhtml import is_horizontal_rule, parse_heading, parse_image_link

ElementDone = Callable[[], None]


class ElementClient(Protocol):
    """Receives the elements the converter does not format itself.

    A client may begin a capture on the converter for the element's subtree
    and return the action that ends it when the element closes.
    """

    def did_start_element(
        self, name: str, attributes: dict[str, str], converter: MarkdownConverter
    ) -> ElementDone | None: ...


class _ConversionAborted(Exception):
    """Raised inside a parser callback to stop event delivery."""


class MarkdownConverter:
    """Convert documentation XML to Markdown for the documentation renderer.

    Output goes to the current capture session. Callers (or an
    `ElementClient`) bracket the part of the document they want with
    `start_markdown`/`end_markdown` or `start_text`/`end_text`.

    Args:
        on_error: Optional callback receiving a message for each document the
            tokenizer rejects.
        config: Formatting and error-policy configuration. Defaults to a new
            `ConverterConfig` when omitted.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        converter = MarkdownConverter(on_error=print)
        converter.start_markdown()
        converter.convert("<Discussion><Para>Some text</Para></Discussion>")
        converter.end_markdown()  # "Some text"
    """

    def __init__(
        self,
        on_error: Callable[[str], None] | None = None,
        config: ConverterConfig | None = None,
    ):
        self.config = config or ConverterConfig()
        validate_config(self.config)
        self.on_error = on_error

        self._openers: dict[ElementKind, Callable[[dict[str, str]], ElementDone | None]] = {
            ElementKind.PARA: self._open_para,
            ElementKind.EMPHASIS: lambda attributes: self._enclose("*"),
            ElementKind.STRONG: lambda attributes: self._enclose("**"),
            ElementKind.CODE_VOICE: lambda attributes: self._enclose("`"),
            ElementKind.CODE_LISTING: self._open_code_listing,
            ElementKind.CODE_LINE_NUMBERED: lambda attributes: None,
            ElementKind.LINK: self._open_link,
            ElementKind.RAW_HTML: self._open_raw_html,
            ElementKind.LIST_BULLET: lambda attributes: self._open_list(ListKind.BULLET),
            ElementKind.LIST_NUMBER: lambda attributes: self._open_list(ListKind.NUMBER),
            ElementKind.ITEM: self._open_item,
        }

        self.reset()

    def reset(self) -> None:
        """Discard all capture sessions and per-conversion state."""
        self._session = self._new_session()
        self._saved_sessions: list[CaptureSession] = []
        self._capturing = False
        self._element_done_stack: list[ElementDone | None] = []
        self._cdata: list[str] | None = None
        self._parser = None
        self._client: ElementClient | None = None

    # Capture sessions

    def begin_capture(self, mode: CaptureMode) -> None:
        """Start collecting output with fresh indentation and context.

        An active capture is saved and resumed when this one ends.
        """
        if self._capturing:
            self._saved_sessions.append(self._session)
        self._session = self._new_session(mode)
        self._capturing = True

    def end_capture(self) -> str:
        """Finish the current capture and return its output.

        Markdown captures are trimmed of surrounding whitespace. When an outer
        capture was active it resumes with the captured text appended.
        """
        session = self._session
        text = session.text
        if session.mode is CaptureMode.MARKDOWN:
            text = text.strip()

        if self._saved_sessions:
            self._session = self._saved_sessions.pop()
            self._emit(text)
        else:
            self._session = self._new_session()
            self._capturing = False
        return text

    def start_markdown(self) -> None:
        self.begin_capture(CaptureMode.MARKDOWN)

    def end_markdown(self) -> str:
        return self.end_capture()

    def start_text(self) -> None:
        self.begin_capture(CaptureMode.TEXT)

    def end_text(self) -> str:
        return self.end_capture()

    # Parsing

    def convert(self, xml: str | bytes, client: ElementClient | None = None) -> None:
        """Run one document through the converter.

        Output lands in whatever captures the caller or `client` have begun.
        Tokenizer failures are passed to `on_error` and the output produced
        up to that point is kept.

        Args:
            xml: The document, as text or UTF-8 bytes.
            client: Optional handler for elements the converter does not
                recognize.

        Returns:
            None.

        Raises:
            MalformedXMLError: If the document cannot be parsed and the
                configuration is strict.

        Examples:
            converter.convert(xml, client=DeclarationBuilder())
        """
        self._element_done_stack = []
        self._cdata = None
        self._client = client

        parser = expat.ParserCreate()
        parser.buffer_text = True
        parser.StartElementHandler = self._start_element
        parser.EndElementHandler = self._end_element
        parser.CharacterDataHandler = self._found_characters
        parser.StartCdataSectionHandler = self._start_cdata
        parser.EndCdataSectionHandler = self._end_cdata
        self._parser = parser

        try:
            parser.Parse(xml, True)
        except _ConversionAborted:
            pass
        except expat.ExpatError as error:
            self._report(expat.ErrorString(error.code), error.lineno, error.offset, xml, error)
        except UnicodeEncodeError as error:
            self._report(
                "document is not valid UTF-8",
                parser.CurrentLineNumber,
                parser.CurrentColumnNumber,
                xml,
                error,
            )
        finally:
            self._parser = None
            self._client = None

    def to_markdown(self, xml: str | bytes, client: ElementClient | None = None) -> str:
        """Convert a whole document and return its Markdown."""
        self.reset()
        self.start_markdown()
        self.convert(xml, client)
        return self.end_markdown()

    def abort(self) -> None:
        """Stop delivering events for the conversion in progress."""
        if self._parser is not None:
            raise _ConversionAborted()

    def _report(
        self,
        reason: str,
        line: int | None,
        column: int | None,
        xml: str | bytes,
        error: Exception,
    ) -> None:
        if isinstance(xml, bytes):
            document = xml.decode("utf-8", errors="replace")
        else:
            document = xml.encode("utf-8", errors="backslashreplace").decode("utf-8")

        if self.config.strict:
            raise MalformedXMLError(reason, line, column, document) from error

        if self.on_error is not None:
            fragment = document[:ERROR_FRAGMENT_LENGTH]
            self.on_error(f"{reason} (line {line}, column {column}) in: {fragment}")

    # Parser callbacks

    def _start_element(self, name: str, attributes: dict[str, str]) -> None:
        element = ElementKind.from_tag(name)
        if element is not None:
            element_done = self._openers[element](attributes)
        elif self._client is not None:
            element_done = self._client.did_start_element(name, attributes, self)
        else:
            element_done = None
        self._element_done_stack.append(element_done)

    def _end_element(self, name: str) -> None:
        element_done = self._element_done_stack.pop()
        if element_done is not None:
            element_done()

    def _found_characters(self, data: str) -> None:
        if self._cdata is not None:
            self._cdata.append(data)
        elif self._session.mode is CaptureMode.TEXT:
            self._emit(data)
        else:
            self._emit(escape_markdown(data))

    def _start_cdata(self) -> None:
        self._cdata = []

    def _end_cdata(self) -> None:
        content = "".join(self._cdata or [])
        self._cdata = None
        self._found_cdata(content)

    def _found_cdata(self, content: str) -> None:
        """Handle a CDATA block: a code line, or raw HTML that may be translated."""
        if self._context.code_listing:
            self._emit(self._indent.prefix() + content + "\n")
            return

        image = parse_image_link(content)
        if image is not None:
            self._emit(image)
            return

        if is_horizontal_rule(content):
            self._emit(HORIZONTAL_RULE)
            return

        heading = parse_heading(content)
        if heading is not None:
            # Keeps the heading text on the marker's line
            self._context.html_heading = True
            if heading.closing:
                self._trim_line_indent()
            self._emit(heading.to_markdown())
            return

        self._emit(content)

    # Element openers

    def _enclose(self, delimiter: str) -> ElementDone:
        self._emit(delimiter)
        return lambda: self._emit(delimiter)

    def _open_link(self, attributes: dict[str, str]) -> ElementDone:
        href = attributes.get("href", "")
        self._emit("[")
        return lambda: self._emit(f"]({href})")

    def _open_para(self, attributes: dict[str, str]) -> ElementDone:
        self._emit(self._indent.line_start())
        self._context.para = True

        def para_done() -> None:
            self._emit("\n")
            self._context.para = False

        return para_done

    def _open_code_listing(self, attributes: dict[str, str]) -> ElementDone:
        language = attributes.get("language", "")
        self._emit(self._indent.line_start() + CODE_FENCE + language + "\n")
        self._context.code_listing = True

        def code_listing_done() -> None:
            self._emit(self._indent.prefix() + CODE_FENCE + "\n")
            self._context.code_listing = False

        return code_listing_done

    def _open_raw_html(self, attributes: dict[str, str]) -> ElementDone:
        # Raw HTML outside a paragraph is a block of its own
        block = not self._context.para
        if block:
            self._emit(self._indent.line_start())

        def raw_html_done() -> None:
            if block and not self._context.html_heading:
                self._emit("\n")
            self._context.html_heading = False

        return raw_html_done

    def _open_list(self, kind: ListKind) -> ElementDone:
        # The renderer needs a blank line before a list that is not nested
        if not self._context.lists:
            self._emit("\n")
        self._indent.increment()
        self._context.lists.append(kind)

        def list_done() -> None:
            self._indent.decrement()
            self._context.lists.pop()

        return list_done

    def _open_item(self, attributes: dict[str, str]) -> None:
        # The marker sits one level shallower than the item's content
        self._indent.decrement()
        self._emit(self._indent.prefix())
        self._indent.increment()

        if self._context.current_list is ListKind.BULLET:
            self._emit(BULLET_MARKER)
        else:
            self._emit(NUMBER_MARKER)
        self._indent.skip_next()
        return None

    # Output

    @property
    def _indent(self) -> Indent:
        return self._session.indent

    @property
    def _context(self) -> ConverterContext:
        return self._session.context

    def _emit(self, text: str) -> None:
        self._session.output.append(text)

    def _trim_line_indent(self) -> None:
        """Drop indentation written for a line that stays empty."""
        output = self._session.output
        if output and not output[-1].strip():
            output[-1] = output[-1].rstrip(" ")

    def _new_session(self, mode: CaptureMode = CaptureMode.MARKDOWN) -> CaptureSession:
        return CaptureSession(mode=mode, indent=Indent(width=self.config.indent_width))
