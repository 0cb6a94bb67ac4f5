"""Restricted markdown renderer.

Turns blog post markdown into a flat sequence of content nodes. This is
not CommonMark: it is a line-oriented scanner over a small dialect, and
it never raises. Anything it does not recognise becomes paragraph text.

Block syntax (one construct per line):
    # / ## / ###        headings
    ![alt](url)         standalone image (alt doubles as caption)
    > text              blockquote, one node per line
    - * + or 1.         list items, consecutive lines form one list
    ---                 horizontal rule
    ```[lang] ... ```   fenced code, captured verbatim

Inline syntax: **bold**, *italic*, `code`, [text](url). The earliest
match in the text wins and its span is taken as plain text; emphasis
does not nest.
"""

import re
from typing import Optional

from podsite.markdown.nodes import (
    Blockquote,
    Bold,
    CodeBlock,
    ContentNode,
    Heading,
    HorizontalRule,
    Image,
    InlineCode,
    InlineNode,
    Italic,
    Link,
    ListBlock,
    Paragraph,
    Text,
)

# =============================================================================
# Patterns
# =============================================================================

FENCE = "```"
FENCE_OPEN_RE = re.compile(r"^```([\w+#.-]*)$")
HEADING_RE = re.compile(r"^(#{1,3}) ")
IMAGE_RE = re.compile(r"^!\[([^\]]*)\]\(([^)]+)\)$")
BULLET_RE = re.compile(r"^[-*+]\s+")
ORDINAL_RE = re.compile(r"^\d+\.\s+")
RULE_RE = re.compile(r"^---+$")
QUOTE_PREFIX = "> "

# Tried in this order; on equal start positions the earlier one wins.
BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
ITALIC_RE = re.compile(r"\*([^*].*?)\*")
CODE_RE = re.compile(r"`([^`]+)`")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


# =============================================================================
# Inline scanning
# =============================================================================


def _inline_node(pattern: re.Pattern, match: re.Match) -> InlineNode:
    if pattern is BOLD_RE:
        return Bold(text=match.group(1))
    if pattern is ITALIC_RE:
        return Italic(text=match.group(1))
    if pattern is CODE_RE:
        return InlineCode(text=match.group(1))
    url = match.group(2)
    return Link(text=match.group(1), url=url, external=url.startswith("http"))


def render_inline(text: str) -> list[InlineNode]:
    """
    Split text into inline nodes.

    >>> render_inline("**bold** and *italic*")
    [Bold(type='bold', text='bold'), Text(type='text', text=' and '), Italic(type='italic', text='italic')]
    """
    nodes: list[InlineNode] = []
    remaining = text

    while remaining:
        earliest: Optional[tuple[re.Pattern, re.Match]] = None
        for pattern in (BOLD_RE, ITALIC_RE, CODE_RE, LINK_RE):
            match = pattern.search(remaining)
            if match and (earliest is None or match.start() < earliest[1].start()):
                earliest = (pattern, match)

        if earliest is None:
            nodes.append(Text(text=remaining))
            break

        pattern, match = earliest
        if match.start() > 0:
            nodes.append(Text(text=remaining[: match.start()]))
        nodes.append(_inline_node(pattern, match))
        remaining = remaining[match.end():]

    return nodes


# =============================================================================
# Block scanning
# =============================================================================


class MarkdownRenderer:
    """
    Single-use line scanner holding the open paragraph, list and code block.

    Use ``render()`` rather than instantiating this directly.
    """

    def __init__(self) -> None:
        self.nodes: list[ContentNode] = []
        self._paragraph: list[str] = []
        self._list_items: list[str] = []
        self._in_code = False
        self._code_lines: list[str] = []
        self._code_language: Optional[str] = None

    def _flush_paragraph(self) -> None:
        if self._paragraph:
            text = " ".join(self._paragraph)
            if text.strip():
                self.nodes.append(Paragraph(children=render_inline(text)))
            self._paragraph = []

    def _flush_list(self) -> None:
        if self._list_items:
            self.nodes.append(
                ListBlock(items=[render_inline(item) for item in self._list_items])
            )
            self._list_items = []

    def _flush_blocks(self) -> None:
        self._flush_paragraph()
        self._flush_list()

    def _close_code(self) -> None:
        # An empty fence pair produces no node.
        if self._code_lines:
            self.nodes.append(
                CodeBlock(code="\n".join(self._code_lines), language=self._code_language)
            )
        self._in_code = False
        self._code_lines = []
        self._code_language = None

    def feed(self, line: str) -> None:
        """Process one input line."""
        stripped = line.strip()

        if self._in_code:
            if stripped == FENCE:
                self._close_code()
            else:
                self._code_lines.append(line)
            return

        fence = FENCE_OPEN_RE.match(stripped)
        if fence:
            self._flush_blocks()
            self._in_code = True
            self._code_language = fence.group(1) or None
            return

        heading = HEADING_RE.match(stripped)
        if heading:
            self._flush_blocks()
            level = len(heading.group(1))
            self.nodes.append(
                Heading(level=level, children=render_inline(stripped[level + 1:].lstrip()))
            )
            return

        image = IMAGE_RE.match(stripped)
        if image:
            self._flush_blocks()
            alt, url = image.group(1), image.group(2)
            self.nodes.append(Image(url=url, alt=alt, caption=alt or None))
            return

        if stripped.startswith(QUOTE_PREFIX):
            self._flush_blocks()
            self.nodes.append(
                Blockquote(children=render_inline(stripped[len(QUOTE_PREFIX):]))
            )
            return

        for marker in (BULLET_RE, ORDINAL_RE):
            item = marker.match(stripped)
            if item:
                self._flush_paragraph()
                self._list_items.append(stripped[item.end():])
                return

        if RULE_RE.match(stripped):
            self._flush_blocks()
            self.nodes.append(HorizontalRule())
            return

        if not stripped:
            self._flush_blocks()
            return

        self._flush_list()
        self._paragraph.append(line)

    def finish(self) -> list[ContentNode]:
        """Flush whatever is still open, including an unterminated fence."""
        self._flush_blocks()
        if self._in_code:
            self._close_code()
        return self.nodes


def render(text: str) -> list[ContentNode]:
    """
    Render markdown text to content nodes.

    >>> render("# Title\\n\\nSome text")
    [Heading(type='heading', level=1, children=[Text(type='text', text='Title')]), Paragraph(type='paragraph', children=[Text(type='text', text='Some text')])]
    """
    renderer = MarkdownRenderer()
    for line in (text or "").replace("\r\n", "\n").split("\n"):
        renderer.feed(line)
    return renderer.finish()
