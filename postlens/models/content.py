"""
Media reference and content block models.

Media references are extracted from a post's markup body. Content blocks are
the ordered, typed sequence handed to the presentation layer; the `kind`
field discriminates variants when the sequence is serialized.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class LinkReference(BaseModel):
    """Link discovered in a markup body."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Link target (href)")
    text: str | None = Field(default=None, description="Flattened element text, if any")


class ParsedMarkup(BaseModel):
    """
    Media references extracted from one markup body.

    Each list is in document order and keeps duplicates.
    """

    model_config = ConfigDict(frozen=True)

    images: tuple[str, ...] = ()
    files: tuple[str, ...] = ()
    links: tuple[LinkReference, ...] = ()

    def is_empty(self) -> bool:
        return not (self.images or self.files or self.links)


class Paragraph(BaseModel):
    """Single line of prose."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph"] = "paragraph"
    text: str


class LineBreakParagraph(BaseModel):
    """Paragraph whose internal line breaks are preserved."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["line_break_paragraph"] = "line_break_paragraph"
    lines: tuple[str, ...]


class ImageBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    src: str


class LinkBlock(BaseModel):
    """Link with resolved display text (falls back to the URL)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["link"] = "link"
    url: str
    text: str


class FileBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    url: str


ContentBlock = Annotated[
    Paragraph | LineBreakParagraph | ImageBlock | LinkBlock | FileBlock,
    Field(discriminator="kind"),
]


class PostContent(BaseModel):
    """Rendered content of one post: text/image blocks then links then files."""

    model_config = ConfigDict(frozen=True)

    blocks: tuple[ContentBlock, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when nothing at all was produced for the post."""
        return not self.blocks
