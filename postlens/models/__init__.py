"""
Data models for PostLens.

Core models:
- Post, RawContent, ClusterMetadata: Corpus records
- Facets, FacetGroup: Facet values per tag dimension
- FilterCriteria, TagUniverse: Faceted filtering
- ParsedMarkup, LinkReference: Media references from markup bodies
- Paragraph, LineBreakParagraph, ImageBlock, LinkBlock, FileBlock: Content blocks
- PostContent: Ordered content of one post
"""

from postlens.models.content import (
    ContentBlock,
    FileBlock,
    ImageBlock,
    LineBreakParagraph,
    LinkBlock,
    LinkReference,
    Paragraph,
    ParsedMarkup,
    PostContent,
)
from postlens.models.filters import FilterCriteria, TagUniverse
from postlens.models.post import (
    ClusterMetadata,
    FacetGroup,
    Facets,
    Post,
    RawContent,
    parse_timestamp,
)

__all__ = [
    # Corpus records
    "Post",
    "RawContent",
    "ClusterMetadata",
    "Facets",
    "FacetGroup",
    "parse_timestamp",
    # Filtering
    "FilterCriteria",
    "TagUniverse",
    # Markup and layout
    "LinkReference",
    "ParsedMarkup",
    "ContentBlock",
    "Paragraph",
    "LineBreakParagraph",
    "ImageBlock",
    "LinkBlock",
    "FileBlock",
    "PostContent",
]
