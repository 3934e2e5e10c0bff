"""Grammar-driven converter from a constrained Markdown dialect to HTML."""

__version__ = "0.1.0"

from .converter import convert, convert_file
from .errors import (
    ConfigError,
    ConversionError,
    GrammarError,
    MarkdownLiteError,
    ResourceAccessError,
)
from .markdown_parser import match_rule, parse_markdown
from .renderer_html import render_document, render_inline

__all__ = [
    "ConfigError",
    "ConversionError",
    "GrammarError",
    "MarkdownLiteError",
    "ResourceAccessError",
    "convert",
    "convert_file",
    "match_rule",
    "parse_markdown",
    "render_document",
    "render_inline",
]
