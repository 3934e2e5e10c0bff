from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .errors import ConversionError, GrammarError
from .markdown_parser import parse_markdown
from .renderer_html import render_document
from .utils import read_markdown

logger = logging.getLogger(__name__)


def convert(markdown_text: str) -> str:
    """Convert Markdown text to HTML.

    Raises ConversionError when the text does not match the grammar. No
    partial output is produced.
    """
    logger.debug("Markdown length: %d chars", len(markdown_text))
    try:
        document = parse_markdown(markdown_text)
    except GrammarError as exc:
        raise ConversionError(f"Markdown parse error: {exc}") from exc
    logger.debug("Parsed %d blocks", len(document.blocks))
    html = render_document(document)
    logger.debug("HTML length: %d chars", len(html))
    return html


def convert_file(path: Union[str, Path]) -> str:
    """Read a UTF-8 Markdown file and convert it to HTML."""
    return convert(read_markdown(Path(path)))
