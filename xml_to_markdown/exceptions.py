"""Package-specific exception types."""

from __future__ import annotations


class ParseError(ValueError):
    """Base class for parsing-related errors.

    Represents errors encountered while reading documentation XML.
    """


class MalformedXMLError(ParseError):
    """Raised in strict mode when the XML tokenizer rejects a document.

    Args:
        reason: Tokenizer description of the failure.
        line: One-based line of the failure, if known.
        column: Zero-based column of the failure, if known.
        document: The document that failed to parse.
    """

    def __init__(self, reason: str, line: int | None, column: int | None, document: str):
        self.reason = reason
        self.line = line
        self.column = column
        self.document = document
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"{self.reason} (line {self.line}, column {self.column})"
