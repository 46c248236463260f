"""
Post browsing service.

Projects the current corpus generation into the structures the
presentation layer consumes: filtered post cards with statistics, tag
groups with display labels, and a single post's detail with its content
blocks. Every call recomputes from the generation it starts with.
"""

from pydantic import BaseModel, Field

from postlens.config import Config
from postlens.core.corpus.store import CorpusStore
from postlens.core.layout.assembler import NO_CONTENT_MESSAGE, render_post_content
from postlens.models.content import PostContent
from postlens.models.filters import FilterCriteria
from postlens.models.post import FacetGroup, Post
from postlens.services.facet_filter import post_matches
from postlens.utils.logger import get_logger

logger = get_logger(__name__)

UNTITLED = "Untitled"
UNKNOWN_AUTHOR = "Unknown Author"
UNKNOWN_DATE = "Unknown date"
NO_PREVIEW = "No content available"


def normalize_tag_label(tag: str | None) -> str:
    """Display label for a facet id: underscores become spaces."""
    return (tag or "").replace("_", " ")


def date_label(post: Post) -> str:
    """Creation date as YYYY-MM-DD, or UNKNOWN_DATE when absent or invalid."""
    created = post.created_date
    return created.strftime("%Y-%m-%d") if created else UNKNOWN_DATE


def preview_text(post: Post, limit: int = 200) -> str:
    """First `limit` characters of the body followed by an ellipsis."""
    body = post.body_text
    return f"{body[:limit]}..." if body else NO_PREVIEW


class TagOption(BaseModel):
    """Facet value with its display label."""

    id: str = Field(..., description="Raw facet id used for matching")
    label: str = Field(..., description="Display label")


class TagGroups(BaseModel):
    models: list[TagOption] = Field(default_factory=list)
    topics: list[TagOption] = Field(default_factory=list)
    assignments: list[TagOption] = Field(default_factory=list)


class PostCard(BaseModel):
    """Summary of one post in a listing."""

    index: int = Field(..., ge=0, description="Position in the current corpus generation")
    title: str
    author: str
    date: str
    preview: str
    tags: TagGroups


class ListingStats(BaseModel):
    shown: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class PostListing(BaseModel):
    generation: int
    stats: ListingStats
    posts: list[PostCard]


class PostDetail(BaseModel):
    """Full view of one post."""

    index: int
    title: str
    author: str
    date: str
    content: PostContent
    empty_message: str | None = Field(
        default=None, description="Fallback text when the post has no content blocks"
    )


def _tag_options(values) -> list[TagOption]:
    return [TagOption(id=value, label=normalize_tag_label(value)) for value in values]


def _tag_groups(source) -> TagGroups:
    """Build TagGroups from anything exposing `values(group)` (Facets, TagUniverse)."""
    return TagGroups(
        **{group.value: _tag_options(source.values(group)) for group in FacetGroup}
    )


class PostBrowser:
    """
    Read-side facade over the corpus store.

    Usage:
        browser = PostBrowser(store, config)
        listing = browser.list_posts(FilterCriteria(title_query="agent"))
        detail = browser.get_detail(listing.posts[0].index)
    """

    def __init__(self, store: CorpusStore, config: Config | None = None):
        """
        Initialize post browser.

        Args:
            store: Corpus store holding the current generation
            config: Configuration object (defaults if not provided)
        """
        self.store = store
        self.config = config or Config()

    def tag_groups(self) -> TagGroups:
        """Tag universe of the current generation with display labels."""
        return _tag_groups(self.store.tag_universe)

    def card(self, index: int, post: Post) -> PostCard:
        return PostCard(
            index=index,
            title=post.title or UNTITLED,
            author=post.author_name or UNKNOWN_AUTHOR,
            date=date_label(post),
            preview=preview_text(post, self.config.corpus.preview_chars),
            tags=_tag_groups(post.facets),
        )

    def list_posts(self, criteria: FilterCriteria | None = None) -> PostListing:
        """
        Filter the current corpus and project matches to cards.

        Args:
            criteria: Filter criteria (no constraint if not provided)

        Returns:
            Cards in corpus order with "showing X of Y" statistics
        """
        criteria = criteria or FilterCriteria()
        generation = self.store.current

        cards = [
            self.card(index, post)
            for index, post in enumerate(generation.posts)
            if post_matches(post, criteria)
        ]

        logger.debug(
            f"Listing generation {generation.generation}: "
            f"{len(cards)} of {len(generation.posts)} posts match"
        )
        return PostListing(
            generation=generation.generation,
            stats=ListingStats(shown=len(cards), total=len(generation.posts)),
            posts=cards,
        )

    def get_detail(self, index: int) -> PostDetail:
        """
        Render one post with its content blocks.

        Raises:
            NotFoundError: If the index is outside the current corpus
        """
        post = self.store.get_post(index)
        content = render_post_content(post)

        return PostDetail(
            index=index,
            title=post.title or UNTITLED,
            author=post.author_name or UNKNOWN_AUTHOR,
            date=date_label(post),
            content=content,
            empty_message=NO_CONTENT_MESSAGE if content.is_empty else None,
        )
