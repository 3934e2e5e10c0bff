from __future__ import annotations

from typing import Iterable, List

from .model import (
    Block,
    CodeBlock,
    Document,
    Header,
    InlineBold,
    InlineElement,
    InlineItalic,
    InlineLink,
    InlineText,
    ListBlock,
    Paragraph,
    ThematicBreak,
)


def render_document(doc: Document) -> str:
    """Render a Document tree to HTML, one trailing newline per element."""
    parts: List[str] = []
    for block in doc.blocks:
        _dispatch_block(parts, block)
    return "".join(parts)


def render_inline(inlines: Iterable[InlineElement]) -> str:
    return "".join(_render_inline_element(element) for element in inlines)


def _dispatch_block(parts: List[str], block: Block) -> None:
    if isinstance(block, Header):
        _render_header(parts, block)
    elif isinstance(block, ThematicBreak):
        parts.append("<hr/>\n")
    elif isinstance(block, ListBlock):
        _render_list(parts, block)
    elif isinstance(block, CodeBlock):
        _render_code_block(parts, block)
    elif isinstance(block, Paragraph):
        _render_paragraph(parts, block)
    else:
        raise TypeError(f"Unsupported block node: {type(block).__name__}")


def _render_header(parts: List[str], header: Header) -> None:
    level = header.level
    parts.append(f"<h{level}>{render_inline(header.inline)}</h{level}>\n")


def _render_list(parts: List[str], list_block: ListBlock) -> None:
    tag = "ol" if list_block.ordered else "ul"
    parts.append(f"<{tag}>\n")
    for item in list_block.items:
        parts.append(f"<li>{render_inline(item)}</li>\n")
    parts.append(f"</{tag}>\n")


def _render_code_block(parts: List[str], code: CodeBlock) -> None:
    # content is passed through unescaped
    parts.append("<pre><code>\n")
    for line in code.lines:
        parts.append(f"{line}\n")
    parts.append("</code></pre>\n")


def _render_paragraph(parts: List[str], paragraph: Paragraph) -> None:
    for line in paragraph.lines:
        parts.append(f"<p>{render_inline(line)}</p>\n")


def _render_inline_element(element: InlineElement) -> str:
    if isinstance(element, InlineText):
        return element.text
    if isinstance(element, InlineBold):
        return f"<strong>{render_inline(element.children)}</strong>"
    if isinstance(element, InlineItalic):
        return f"<em>{render_inline(element.children)}</em>"
    if isinstance(element, InlineLink):
        return f'<a href="{element.url}">{element.text}</a>'
    raise TypeError(f"Unsupported inline node: {type(element).__name__}")
