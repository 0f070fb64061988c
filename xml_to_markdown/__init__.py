"""
xml-to-markdown: documentation-comment XML to Markdown converter.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    xml-to-markdown decl.xml
    xml-to-markdown --output declaration < decl.xml

Library Usage:
    from xml_to_markdown import MarkdownConverter, build_declaration

    converter = MarkdownConverter(on_error=print)
    markdown = converter.to_markdown("<Para>Some <emphasis>text</emphasis></Para>")
    declaration = build_declaration(xml)
"""

from .config import ConfigError, ConverterConfig
from .converter import ElementClient, MarkdownConverter
from .declaration import (
    DeclarationBuilder,
    DeclarationExtractor,
    build_declaration,
    extract_declaration,
)
from .escape import escape_markdown
from .exceptions import MalformedXMLError, ParseError
from .models import CaptureMode, Declaration, Parameter

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "MarkdownConverter",
    "ElementClient",
    "build_declaration",
    "extract_declaration",
    "DeclarationBuilder",
    "DeclarationExtractor",
    "escape_markdown",
    # Data models
    "CaptureMode",
    "Declaration",
    "Parameter",
    # Configuration
    "ConverterConfig",
    "ConfigError",
    # Exceptions
    "MalformedXMLError",
    "ParseError",
    # Version
    "__version__",
]
