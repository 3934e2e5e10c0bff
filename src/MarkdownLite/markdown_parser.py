from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import GrammarError
from .model import (
    Block,
    CodeBlock,
    Document,
    Header,
    InlineBold,
    InlineElement,
    InlineItalic,
    InlineLink,
    InlineSequence,
    InlineText,
    ListBlock,
    Paragraph,
    ThematicBreak,
)

SPACE_CHARS = " \t"
INLINE_MARKERS = "*_["
THEMATIC_CHARS = "-*_"
BULLET_CHARS = "-*+"
BOLD_DELIMITERS = ("**", "__")
ITALIC_DELIMITERS = ("*", "_")
FENCE = "```"
DIGITS = "0123456789"
MAX_HEADER_LEVEL = 6

_Match = Optional[Tuple[Any, int]]


@dataclass(frozen=True)
class RuleMatch:
    rule: str
    span: str
    node: Any


def parse_markdown(text: str) -> Document:
    """Recognize a whole document, raising GrammarError if it does not match."""
    matcher = _Matcher(text)
    try:
        result = matcher.markdown(0)
    except RecursionError:
        raise matcher.nesting_error() from None
    if result is None:
        raise matcher.error()
    document, _ = result
    return document


def match_rule(rule: str, text: str) -> RuleMatch:
    """Match a single grammar rule at the start of ``text``.

    The rule does not have to consume the whole input. Unknown rule names
    raise KeyError.
    """
    matcher = _Matcher(text)
    parse = matcher.rules[rule]
    try:
        result = parse(0)
    except RecursionError:
        raise matcher.nesting_error() from None
    if result is None:
        raise matcher.error()
    node, end = result
    return RuleMatch(rule=rule, span=text[:end], node=node)


class _Matcher:
    """Ordered-choice recursive descent over one input string.

    Every rule method takes a start offset and returns ``(node, end)`` or
    None. Failures are tracked at the furthest offset reached so that the
    final GrammarError points at the deepest mismatch.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.furthest = 0
        self.expected: List[str] = []
        self._memo: Dict[Tuple[str, int, int], Tuple[_Match, int, List[str]]] = {}
        self.rules: Dict[str, Callable[[int], _Match]] = {
            "markdown": self.markdown,
            "block": self.block,
            "special_block": self.special_block,
            "header": self.header,
            "header_hashtags": self.header_hashtags,
            "thematic_break": self.thematic_break,
            "list": self.list_block,
            "ordered_list": self.ordered_list,
            "unordered_list": self.unordered_list,
            "code_block": self.code_block,
            "paragraph": self.paragraph,
            "line": self.line,
            "line_pars": self.line_pars,
            "inline": self.inline,
            "link": self.link,
            "link_text": self.link_text,
            "link_href": self.link_href,
            "bold": self.bold,
            "italic": self.italic,
            "text": self.text_run,
            "space": self.space,
            "newline": self.newline,
            "blankline": self.blankline,
        }

    # failure bookkeeping

    def _fail(self, rule: str, pos: int) -> None:
        if pos > self.furthest:
            self.furthest = pos
            self.expected = [rule]
        elif pos == self.furthest and rule not in self.expected:
            self.expected.append(rule)
        return None

    def _lookahead(self, rule: Callable[..., _Match], *args: Any) -> bool:
        furthest, expected = self.furthest, list(self.expected)
        try:
            return rule(*args) is not None
        finally:
            self.furthest, self.expected = furthest, expected

    def _cached(self, name: str, rule: Callable[[int, int], _Match], pos: int, end: int) -> _Match:
        # results depend only on (pos, end); the failures a call recorded are
        # replayed on every hit so error reporting is unchanged
        key = (name, pos, end)
        entry = self._memo.get(key)
        if entry is None:
            outer = self.furthest, self.expected
            self.furthest, self.expected = -1, []
            try:
                result = rule(pos, end)
                entry = (result, self.furthest, self.expected)
            finally:
                self.furthest, self.expected = outer
            self._memo[key] = entry
        result, furthest, expected = entry
        for failed in expected:
            self._fail(failed, furthest)
        return result

    def error(self) -> GrammarError:
        pos = self.furthest
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        return GrammarError(self.expected, offset=pos, line=line, column=column)

    def nesting_error(self) -> GrammarError:
        error = self.error()
        return GrammarError(
            ("inline",), offset=error.offset, line=error.line, column=error.column, detail="inline nesting too deep"
        )

    # whitespace primitives

    def _line_end(self, pos: int) -> int:
        end = self.text.find("\n", pos)
        if end == -1:
            return len(self.text)
        if end > pos and self.text[end - 1] == "\r":
            return end - 1
        return end

    def _newline_end(self, pos: int) -> Optional[int]:
        if self.text.startswith("\n", pos):
            return pos + 1
        if self.text.startswith("\r\n", pos):
            return pos + 2
        return None

    def _skip_spaces(self, pos: int) -> int:
        while pos < len(self.text) and self.text[pos] in SPACE_CHARS:
            pos += 1
        return pos

    def _is_blank_line(self, pos: int) -> bool:
        pos = self._skip_spaces(pos)
        return pos == len(self.text) or self._newline_end(pos) is not None

    def _opens_fence(self, pos: int) -> bool:
        return self.text[pos : self._line_end(pos)] == FENCE

    def space(self, pos: int) -> _Match:
        if pos < len(self.text) and self.text[pos] in SPACE_CHARS:
            return None, pos + 1
        return self._fail("space", pos)

    def newline(self, pos: int) -> _Match:
        end = self._newline_end(pos)
        if end is None:
            return self._fail("newline", pos)
        return None, end

    def _skip_blanklines(self, pos: int) -> int:
        while True:
            end = self._newline_end(self._skip_spaces(pos))
            if end is None:
                return pos
            pos = end

    def blankline(self, pos: int) -> _Match:
        cur = self._skip_blanklines(pos)
        if cur == pos:
            return self._fail("blankline", pos)
        return None, cur

    # blocks

    def markdown(self, pos: int) -> _Match:
        blocks: List[Block] = []
        while True:
            pos = self._skip_blanklines(pos)
            if self._skip_spaces(pos) == len(self.text):
                return Document(blocks=tuple(blocks)), len(self.text)
            result = self.block(pos)
            if result is None:
                return self._fail("markdown", pos)
            block, pos = result
            blocks.append(block)
            end = self._newline_end(pos)
            if end is not None:
                pos = end

    def block(self, pos: int) -> _Match:
        result = self.special_block(pos)
        if result is None:
            result = self.paragraph(pos)
        if result is None:
            return self._fail("block", pos)
        return result

    def special_block(self, pos: int) -> _Match:
        for rule in (self.header, self.thematic_break, self.list_block, self.code_block):
            result = rule(pos)
            if result is not None:
                return result
        return self._fail("special_block", pos)

    def header_hashtags(self, pos: int) -> _Match:
        end = pos
        while end < len(self.text) and self.text[end] == "#":
            end += 1
        level = end - pos
        if not 1 <= level <= MAX_HEADER_LEVEL:
            return self._fail("header_hashtags", pos)
        return level, end

    def header(self, pos: int) -> _Match:
        hashtags = self.header_hashtags(pos)
        if hashtags is None:
            return self._fail("header", pos)
        level, cur = hashtags
        start = self._skip_spaces(cur)
        if start == cur:
            return self._fail("header", cur)
        line = self.line_pars(start)
        if line is None:
            return self._fail("header", start)
        inline, end = line
        return Header(level=level, inline=inline), end

    def thematic_break(self, pos: int) -> _Match:
        end = self._line_end(pos)
        line = self.text[pos:end]
        if len(line) >= 3 and line[0] in THEMATIC_CHARS and line == line[0] * len(line):
            return ThematicBreak(), end
        return self._fail("thematic_break", pos)

    def list_block(self, pos: int) -> _Match:
        result = self.ordered_list(pos)
        if result is None:
            result = self.unordered_list(pos)
        if result is None:
            return self._fail("list", pos)
        return result

    def ordered_list(self, pos: int) -> _Match:
        return self._list_of(pos, self._ordered_item, ordered=True, rule="ordered_list")

    def unordered_list(self, pos: int) -> _Match:
        return self._list_of(pos, self._unordered_item, ordered=False, rule="unordered_list")

    def _list_of(self, pos: int, item: Callable[[int], _Match], ordered: bool, rule: str) -> _Match:
        items: List[InlineSequence] = []
        start = end = pos
        while True:
            result = item(start)
            if result is None:
                break
            inline, end = result
            items.append(inline)
            following = self._newline_end(end)
            if following is None:
                break
            start = following
        if not items:
            return self._fail(rule, pos)
        return ListBlock(items=tuple(items), ordered=ordered), end

    def _unordered_item(self, pos: int) -> _Match:
        if pos >= len(self.text) or self.text[pos] not in BULLET_CHARS:
            return self._fail("unordered_list", pos)
        return self._item_content(pos + 1, "unordered_list")

    def _ordered_item(self, pos: int) -> _Match:
        cur = pos
        while cur < len(self.text) and self.text[cur] in DIGITS:
            cur += 1
        if cur == pos or not self.text.startswith(".", cur):
            return self._fail("ordered_list", cur)
        return self._item_content(cur + 1, "ordered_list")

    def _item_content(self, pos: int, rule: str) -> _Match:
        start = self._skip_spaces(pos)
        if start == pos:
            return self._fail(rule, pos)
        return self.line_pars(start)

    def code_block(self, pos: int) -> _Match:
        if not self._opens_fence(pos):
            return self._fail("code_block", pos)
        cur = self._newline_end(pos + len(FENCE))
        lines: List[str] = []
        while cur is not None and cur < len(self.text):
            end = self._line_end(cur)
            line = self.text[cur:end]
            if line == FENCE:
                return CodeBlock(lines=tuple(lines)), end
            lines.append(line)
            cur = self._newline_end(end)
        # unterminated fence
        return self._fail("code_block", len(self.text))

    def paragraph(self, pos: int) -> _Match:
        lines: List[InlineSequence] = []
        start = end = pos
        while not (self._is_blank_line(start) or self._opens_fence(start)):
            result = self.line_pars(start)
            if result is None:
                break
            inline, end = result
            lines.append(inline)
            following = self._newline_end(end)
            if following is None or self._lookahead(self.special_block, following):
                break
            start = following
        if not lines:
            return self._fail("paragraph", pos)
        return Paragraph(lines=tuple(lines)), end

    # inlines

    def line(self, pos: int) -> _Match:
        result = self.line_pars(pos)
        if result is None:
            return self._fail("line", pos)
        inline, end = result
        if end == len(self.text):
            return inline, end
        following = self._newline_end(end)
        if following is None:
            return self._fail("line", end)
        return inline, following

    def line_pars(self, pos: int) -> _Match:
        end = self._line_end(pos)
        children, cur = self._inline_run(pos, end)
        if not children or cur != end:
            return self._fail("line_pars", cur)
        return children, cur

    def _inline_run(
        self, pos: int, end: int, closes: Optional[Callable[[int], bool]] = None
    ) -> Tuple[InlineSequence, int]:
        children: List[InlineElement] = []
        cur = pos
        while cur < end and not (closes is not None and closes(cur)):
            result = self.inline(cur, end)
            if result is None:
                break
            node, cur = result
            children.append(node)
        return tuple(children), cur

    def inline(self, pos: int, end: Optional[int] = None) -> _Match:
        if end is None:
            end = self._line_end(pos)
        for rule in (self.link, self.bold, self.italic, self.text_run):
            result = rule(pos, end)
            if result is not None:
                return result
        return self._fail("inline", pos)

    def link(self, pos: int, end: Optional[int] = None) -> _Match:
        if end is None:
            end = self._line_end(pos)
        if not self.text.startswith("[", pos, end):
            return self._fail("link", pos)
        text, cur = self.link_text(pos + 1, end)
        if not self.text.startswith("](", cur, end):
            return self._fail("link", cur)
        url, cur = self.link_href(cur + 2, end)
        if not self.text.startswith(")", cur, end):
            return self._fail("link", cur)
        return InlineLink(text=text, url=url), cur + 1

    def link_text(self, pos: int, end: Optional[int] = None) -> Tuple[str, int]:
        return self._run_until(pos, end, "]")

    def link_href(self, pos: int, end: Optional[int] = None) -> Tuple[str, int]:
        return self._run_until(pos, end, ")")

    def _run_until(self, pos: int, end: Optional[int], stop: str) -> Tuple[str, int]:
        if end is None:
            end = self._line_end(pos)
        cur = pos
        while cur < end and self.text[cur] != stop:
            cur += 1
        return self.text[pos:cur], cur

    def bold(self, pos: int, end: Optional[int] = None) -> _Match:
        if end is None:
            end = self._line_end(pos)
        return self._cached("bold", self._bold, pos, end)

    def _bold(self, pos: int, end: int) -> _Match:
        for delimiter in BOLD_DELIMITERS:
            if self.text.startswith(delimiter, pos, end):
                break
        else:
            return self._fail("bold", pos)

        def closes(at: int) -> bool:
            return self.text.startswith(delimiter, at, end)

        children, cur = self._inline_run(pos + len(delimiter), end, closes)
        if not children or not closes(cur):
            return self._fail("bold", cur)
        return InlineBold(children=children), cur + len(delimiter)

    def italic(self, pos: int, end: Optional[int] = None) -> _Match:
        if end is None:
            end = self._line_end(pos)
        return self._cached("italic", self._italic, pos, end)

    def _italic(self, pos: int, end: int) -> _Match:
        for delimiter in ITALIC_DELIMITERS:
            if self.text.startswith(delimiter, pos, end):
                break
        else:
            return self._fail("italic", pos)

        # a doubled delimiter inside an italic opens a bold span, not the closer
        def closes(at: int) -> bool:
            return self.text.startswith(delimiter, at, end) and not self._lookahead(self.bold, at, end)

        children, cur = self._inline_run(pos + 1, end, closes)
        if not children or not closes(cur):
            return self._fail("italic", cur)
        return InlineItalic(children=children), cur + 1

    def text_run(self, pos: int, end: Optional[int] = None) -> _Match:
        if end is None:
            end = self._line_end(pos)
        cur = pos
        while cur < end and self.text[cur] not in INLINE_MARKERS:
            cur += 1
        if cur == pos:
            return self._fail("text", pos)
        return InlineText(text=self.text[pos:cur]), cur
