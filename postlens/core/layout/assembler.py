"""
Layout assembly: body text plus image references into ordered content blocks.

Two modes:
- Interleave (images present, body non-empty): one Paragraph per non-blank
  line, with the next pending image placed after lines that look like they
  introduce a screenshot. Unplaced images trail the text.
- Paragraphs (otherwise): blank-line separated groups, each kept with its
  internal line breaks.

The interleave heuristic follows the authoring convention of the source
posts (narrated steps followed by screenshots) and is kept exactly as is.
"""

from collections.abc import Sequence
from functools import reduce

from postlens.core.markup.parser import parse_markup
from postlens.models.content import (
    ContentBlock,
    FileBlock,
    ImageBlock,
    LineBreakParagraph,
    LinkBlock,
    LinkReference,
    Paragraph,
    PostContent,
)
from postlens.models.post import Post

NO_CONTENT_MESSAGE = "No content available for this post."

# Next-line prefixes that mark the end of a step narrated before an image
IMAGE_FOLLOWUP_PREFIXES = ("Output", "Analysis", "Prompt")

_LayoutState = tuple[tuple[ContentBlock, ...], tuple[str, ...]]


def _introduces_image(line: str, next_line: str) -> bool:
    """Check whether an image belongs right after `line` (both trimmed)."""
    return next_line == "" or next_line.startswith(IMAGE_FOLLOWUP_PREFIXES) or line.endswith(":")


def _place_line(state: _LayoutState, pair: tuple[str, str]) -> _LayoutState:
    blocks, remaining = state
    line, next_line = pair

    if line:
        blocks = blocks + (Paragraph(text=line),)

    if remaining and _introduces_image(line, next_line):
        blocks = blocks + (ImageBlock(src=remaining[0]),)
        remaining = remaining[1:]

    return blocks, remaining


def _interleave(body_text: str, images: Sequence[str]) -> list[ContentBlock]:
    lines = [line.strip() for line in body_text.split("\n")]
    next_lines = lines[1:] + [""]

    initial: _LayoutState = ((), tuple(images))
    blocks, remaining = reduce(_place_line, zip(lines, next_lines), initial)

    return [*blocks, *(ImageBlock(src=src) for src in remaining)]


def _paragraphs(body_text: str) -> list[ContentBlock]:
    groups = (group.strip() for group in body_text.split("\n\n"))
    return [LineBreakParagraph(lines=tuple(group.split("\n"))) for group in groups if group]


def assemble_layout(body_text: str | None, images: Sequence[str]) -> list[ContentBlock]:
    """
    Build the text and image blocks for a post body.

    Args:
        body_text: Plain body text, possibly absent
        images: Image sources in markup order

    Returns:
        Ordered content blocks; empty when there is no body text
    """
    if not body_text:
        return []
    if images:
        return _interleave(body_text, images)
    return _paragraphs(body_text)


def link_display_text(link: LinkReference) -> str:
    """Link text when it has visible content, otherwise the URL."""
    if link.text and link.text.strip():
        return link.text
    return link.url


def render_post_content(post: Post) -> PostContent:
    """
    Reconstruct a post's full content.

    Text and image blocks come first, then one LinkBlock per link and one
    FileBlock per file, each in discovery order. Malformed markup only
    drops the media; the body text is still laid out.

    Args:
        post: Selected post

    Returns:
        PostContent; `is_empty` tells the caller to show NO_CONTENT_MESSAGE
    """
    parsed = parse_markup(post.markup_content)

    blocks: list[ContentBlock] = assemble_layout(post.body_text, parsed.images)
    blocks.extend(LinkBlock(url=link.url, text=link_display_text(link)) for link in parsed.links)
    blocks.extend(FileBlock(url=url) for url in parsed.files)

    return PostContent(blocks=tuple(blocks))
