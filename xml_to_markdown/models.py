"""Data models for xml-to-markdown."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from .constants import DEFAULT_INDENT_WIDTH


class ElementKind(Enum):
    """Documentation elements the converter formats itself.

    Values are the XML tag names. Any other tag is handed to the element
    client, if one is installed.
    """

    PARA = "Para"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    CODE_VOICE = "codeVoice"
    CODE_LISTING = "CodeListing"
    CODE_LINE_NUMBERED = "zCodeLineNumbered"
    LINK = "Link"
    RAW_HTML = "rawHTML"
    LIST_BULLET = "List-Bullet"
    LIST_NUMBER = "List-Number"
    ITEM = "Item"

    @classmethod
    def from_tag(cls, tag: str) -> ElementKind | None:
        try:
            return cls(tag)
        except ValueError:
            return None


class ListKind(Enum):
    """Kind of list an item marker is rendered for."""

    BULLET = auto()
    NUMBER = auto()


class CaptureMode(Enum):
    """How literal text is written while capturing.

    Attributes:
        TEXT: Text is passed through verbatim.
        MARKDOWN: Markdown-significant characters are escaped and the result
            is trimmed when the capture ends.
    """

    TEXT = auto()
    MARKDOWN = auto()


@dataclass
class Indent:
    """Indentation caused by nested lists.

    Attributes:
        width: Spaces per nesting level.
        level: Current list nesting depth.
        skip: One-shot flag suppressing the next prefix, set after a list
            item marker so the item's first block follows it directly.
    """

    width: int = DEFAULT_INDENT_WIDTH
    level: int = 0
    skip: bool = False

    def increment(self) -> None:
        self.level += 1

    def decrement(self) -> None:
        self.level -= 1

    def skip_next(self) -> None:
        self.skip = True

    def prefix(self) -> str:
        """Return the indentation for the current level, consuming `skip`."""
        if self.skip:
            self.skip = False
            return ""
        return " " * (self.width * max(self.level, 0))

    def line_start(self) -> str:
        """Return a newline plus indentation, or nothing right after a marker."""
        if self.skip:
            self.skip = False
            return ""
        return "\n" + self.prefix()


@dataclass
class ConverterContext:
    """Elements currently open that affect how children are formatted.

    Attributes:
        para: Inside a paragraph; raw HTML is inline rather than block.
        code_listing: Inside a code listing; CDATA lines are code.
        html_heading: A heading tag was just emitted from raw HTML.
        lists: Kinds of the open lists, innermost last.
    """

    para: bool = False
    code_listing: bool = False
    html_heading: bool = False
    lists: list[ListKind] = field(default_factory=list)

    @property
    def current_list(self) -> ListKind | None:
        return self.lists[-1] if self.lists else None


@dataclass
class CaptureSession:
    """Output accumulated for one capture along with its formatting state."""

    mode: CaptureMode = CaptureMode.MARKDOWN
    output: list[str] = field(default_factory=list)
    indent: Indent = field(default_factory=Indent)
    context: ConverterContext = field(default_factory=ConverterContext)

    @property
    def text(self) -> str:
        return "".join(self.output)


@dataclass(frozen=True)
class Parameter:
    """A documented parameter.

    Attributes:
        name: Parameter name, empty when the document omits it.
        discussion: Markdown describing the parameter, if any.
    """

    name: str = ""
    discussion: str | None = None


@dataclass(frozen=True)
class Declaration:
    """Contents of a declaration's documentation XML.

    Discussion fields are Markdown; the others are plain text.

    Attributes:
        file: Source file path from the root element.
        line: Source line from the root element.
        column: Source column from the root element.
        kind: Root tag name, for example ``"Function"``.
        name: Display name.
        usr: Unique symbol identifier.
        declaration: Raw signature text.
        result_discussion: Markdown describing the return value.
        parameters: Parameters in document order.
    """

    file: str | None = None
    line: int | None = None
    column: int | None = None
    kind: str | None = None
    name: str | None = None
    usr: str | None = None
    declaration: str | None = None
    result_discussion: str | None = None
    parameters: tuple[Parameter, ...] = ()
