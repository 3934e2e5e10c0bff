"""MarkdownLite exception hierarchy.

Keep this module small and dependency-free: the parser, the facade and the
CLI all import it.
"""

from __future__ import annotations

from typing import Optional, Sequence


class MarkdownLiteError(Exception):
    """Base exception for all MarkdownLite errors."""


class GrammarError(MarkdownLiteError):
    """Raised when the input does not match the grammar at some position."""

    def __init__(
        self, rules: Sequence[str], offset: int, line: int, column: int, detail: Optional[str] = None
    ) -> None:
        self.rules = tuple(rules)
        self.offset = offset
        self.line = line
        self.column = column
        if detail is None:
            detail = "expected " + (", ".join(self.rules) or "end of input")
        super().__init__(f"line {line}, column {column}: {detail}")


class ConversionError(MarkdownLiteError):
    """Raised by the facade when a document cannot be converted."""


class ResourceAccessError(MarkdownLiteError):
    """Raised when a source cannot be read or a sink cannot be written."""

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        super().__init__(message)


class ConfigError(MarkdownLiteError):
    """Raised for an invalid configuration file."""
