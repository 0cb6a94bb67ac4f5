"""
Restricted markdown rendering for blog content.

- renderer: text -> content nodes
- nodes: typed block and inline nodes
- html: content nodes -> escaped HTML fragment
"""

from podsite.markdown.html import render_html
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
from podsite.markdown.renderer import MarkdownRenderer, render, render_inline

__all__ = [
    "render_html",
    "Blockquote",
    "Bold",
    "CodeBlock",
    "ContentNode",
    "Heading",
    "HorizontalRule",
    "Image",
    "InlineCode",
    "InlineNode",
    "Italic",
    "Link",
    "ListBlock",
    "Paragraph",
    "Text",
    "MarkdownRenderer",
    "render",
    "render_inline",
]
