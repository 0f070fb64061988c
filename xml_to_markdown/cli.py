"""
Converts documentation-comment XML to Markdown.
Each input document is converted independently and printed to stdout.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict
from pathlib import Path

import click
from .config import ConfigError, ConverterConfig, build_config
from .converter import MarkdownConverter
from .declaration import build_declaration, extract_declaration
from .exceptions import MalformedXMLError
from .filesystem import enforce_file_size, get_max_file_size, safe_read

__all__ = ["cli"]

OUTPUT_FORMATS = ("markdown", "declaration", "signature")


def report_error(message: str) -> None:
    click.echo(f"ERROR: {message}")


def render_document(xml: str, output: str, config: ConverterConfig) -> str:
    """Convert one document in the requested output format.

    Args:
        xml: Documentation XML.
        output: One of ``markdown``, ``declaration`` or ``signature``.
        config: Converter configuration.

    Returns:
        str: Markdown, the declaration record as JSON, or the signature text.

    Raises:
        MalformedXMLError: If the document is malformed and `config` is strict.
    """
    if output == "declaration":
        declaration = build_declaration(xml, on_error=report_error, config=config)
        return json.dumps(asdict(declaration), indent=2)

    if output == "signature":
        return extract_declaration(xml, on_error=report_error, config=config) or ""

    converter = MarkdownConverter(on_error=report_error, config=config)
    return converter.to_markdown(xml)


@click.command()
@click.version_option(package_name="xml-to-markdown")
@click.option(
    "--output",
    type=click.Choice(OUTPUT_FORMATS),
    default="markdown",
    show_default=True,
    help="What to print for each document",
)
@click.option("--strict/--no-strict", default=None, help="Fail on malformed XML")
@click.option("--indent-width", type=int, help="Spaces per list nesting level")
@click.argument("files", nargs=-1, type=click.Path())
def cli(
    files: tuple[str, ...],
    output: str = "markdown",
    strict: bool | None = None,
    indent_width: int | None = None,
):
    """
    Entry point for converting documentation XML files.

    Args:
        files: Paths of XML documents. Standard input is read as one document
            when none are given.
        output: Output format (`markdown`, `declaration` or `signature`).
        strict: Override for the malformed-XML policy.
        indent_width: Override for the list indentation width.

    Returns:
        None.

    Raises:
        click.BadParameter: If configuration values are invalid.
        click.ClickException: If a document is malformed in strict mode or the
            file size limit is invalid.

    Examples:
        xml-to-markdown --output declaration decl.xml
    """
    try:
        config = build_config(Path.cwd(), strict=strict, indent_width=indent_width)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    if files:
        documents = (_read_document(Path(file), max_file_size) for file in files)
    else:
        documents = iter([sys.stdin.read()])

    for xml in documents:
        if xml is None:
            continue
        try:
            click.echo(render_document(xml, output, config))
        except MalformedXMLError as error:
            raise click.ClickException(str(error)) from error


def _read_document(filepath: Path, max_file_size: int) -> str | None:
    try:
        enforce_file_size(filepath, max_file_size)
        with safe_read(filepath) as file:
            return file.read()
    except UnicodeDecodeError as error:
        report_error(f"Invalid UTF-8 sequence in {filepath}: {error}")
    except IOError as error:
        report_error(str(error))
    return None


if __name__ == "__main__":
    cli()
