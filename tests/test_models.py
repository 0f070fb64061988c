from xml_to_markdown.models import (
    CaptureSession,
    ConverterContext,
    Declaration,
    ElementKind,
    Indent,
    ListKind,
)


def test_indent_prefix_scales_with_level():
    indent = Indent(width=4)
    assert indent.prefix() == ""

    indent.increment()
    indent.increment()
    assert indent.prefix() == " " * 8

    indent.decrement()
    assert indent.prefix() == " " * 4


def test_indent_skip_is_consumed_once():
    indent = Indent(width=4, level=1)
    indent.skip_next()

    assert indent.line_start() == ""
    assert indent.skip is False
    assert indent.line_start() == "\n    "


def test_indent_prefix_also_consumes_skip():
    indent = Indent(width=2, level=1, skip=True)

    assert indent.prefix() == ""
    assert indent.prefix() == "  "


def test_indent_never_negative():
    indent = Indent()
    indent.decrement()
    assert indent.prefix() == ""


def test_context_current_list():
    context = ConverterContext()
    assert context.current_list is None

    context.lists.append(ListKind.NUMBER)
    context.lists.append(ListKind.BULLET)
    assert context.current_list is ListKind.BULLET

    context.lists.pop()
    assert context.current_list is ListKind.NUMBER


def test_element_kind_from_tag():
    assert ElementKind.from_tag("List-Bullet") is ElementKind.LIST_BULLET
    assert ElementKind.from_tag("codeVoice") is ElementKind.CODE_VOICE
    assert ElementKind.from_tag("Discussion") is None


def test_capture_session_text():
    session = CaptureSession()
    session.output.extend(["a", "b"])
    assert session.text == "ab"


def test_declaration_defaults():
    declaration = Declaration()
    assert declaration.parameters == ()
    assert declaration.kind is None
