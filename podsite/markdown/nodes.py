"""Content node types produced by the markdown renderer.

Every node carries a ``type`` discriminator so a node sequence serializes
to JSON the display layer can switch on.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# Inline nodes
# =============================================================================


class Text(Node):
    type: Literal["text"] = "text"
    text: str


class Bold(Node):
    type: Literal["bold"] = "bold"
    text: str


class Italic(Node):
    type: Literal["italic"] = "italic"
    text: str


class InlineCode(Node):
    type: Literal["code"] = "code"
    text: str


class Link(Node):
    """A hyperlink. External targets open in a new browsing context."""

    type: Literal["link"] = "link"
    text: str
    url: str
    external: bool = False


InlineNode = Annotated[
    Union[Text, Bold, Italic, InlineCode, Link],
    Field(discriminator="type"),
]


# =============================================================================
# Block nodes
# =============================================================================


class Heading(Node):
    type: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=3)
    children: list[InlineNode] = Field(default_factory=list)


class Paragraph(Node):
    type: Literal["paragraph"] = "paragraph"
    children: list[InlineNode] = Field(default_factory=list)


class ListBlock(Node):
    """Bulleted and numbered items alike; the marker kind is not kept."""

    type: Literal["list"] = "list"
    items: list[list[InlineNode]] = Field(default_factory=list)


class Blockquote(Node):
    type: Literal["blockquote"] = "blockquote"
    children: list[InlineNode] = Field(default_factory=list)


class CodeBlock(Node):
    type: Literal["code_block"] = "code_block"
    code: str
    language: Optional[str] = None


class Image(Node):
    type: Literal["image"] = "image"
    url: str
    alt: str = ""
    caption: Optional[str] = None


class HorizontalRule(Node):
    type: Literal["hr"] = "hr"


ContentNode = Annotated[
    Union[Heading, Paragraph, ListBlock, Blockquote, CodeBlock, Image, HorizontalRule],
    Field(discriminator="type"),
]
