"""
In-memory corpus store with atomic generations.

Each load builds a complete CorpusGeneration (posts plus derived tag
universe) before swapping it in, so readers holding the previous
generation keep a consistent view and a failed load leaves it untouched.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from postlens.core.corpus.loader import parse_corpus, read_corpus_file
from postlens.models.filters import TagUniverse
from postlens.models.post import FacetGroup, Post
from postlens.utils.exceptions import CorpusLoadError, NotFoundError
from postlens.utils.logger import get_logger

logger = get_logger(__name__)


def build_tag_universe(posts: Iterable[Post]) -> TagUniverse:
    """
    Collect the distinct facet values of a corpus.

    Args:
        posts: Corpus posts

    Returns:
        Sorted, deduplicated values per facet group
    """
    collected: dict[FacetGroup, set[str]] = {group: set() for group in FacetGroup}
    for post in posts:
        facets = post.facets
        for group in FacetGroup:
            collected[group].update(facets.values(group))

    return TagUniverse(**{group.value: tuple(sorted(values)) for group, values in collected.items()})


class CorpusGeneration(BaseModel):
    """One atomically installed corpus snapshot."""

    model_config = ConfigDict(frozen=True)

    generation: int = Field(default=0, ge=0, description="Monotonic load counter")
    posts: tuple[Post, ...] = ()
    tag_universe: TagUniverse = Field(default_factory=TagUniverse)
    source: str | None = Field(default=None, description="Where the posts came from")
    loaded_at: datetime | None = None

    def __len__(self) -> int:
        return len(self.posts)


class CorpusStore:
    """
    Owner of the current corpus generation.

    Usage:
        store = CorpusStore()
        await store.load_file("posts.jsonl")
        generation = store.current
    """

    def __init__(self):
        self._current = CorpusGeneration()
        self.last_error: str | None = None

    @property
    def current(self) -> CorpusGeneration:
        """The installed generation. Grab once per operation for a consistent view."""
        return self._current

    @property
    def posts(self) -> tuple[Post, ...]:
        return self._current.posts

    @property
    def tag_universe(self) -> TagUniverse:
        return self._current.tag_universe

    def replace(self, posts: Sequence[Post], source: str | None = None) -> CorpusGeneration:
        """
        Install a new corpus, replacing the previous one wholesale.

        Args:
            posts: Complete new corpus
            source: Optional label for where the posts came from

        Returns:
            The installed generation
        """
        posts = tuple(posts)
        generation = CorpusGeneration(
            generation=self._current.generation + 1,
            posts=posts,
            tag_universe=build_tag_universe(posts),
            source=source,
            loaded_at=datetime.now(),
        )
        self._current = generation
        self.last_error = None

        logger.info(
            f"Installed corpus generation {generation.generation}: "
            f"{len(posts)} posts from {source or 'memory'}"
        )
        return generation

    def load_text(self, text: str, source_name: str | None = None) -> CorpusGeneration:
        """
        Decode corpus text and install it.

        Raises:
            CorpusLoadError: If decoding fails; the current generation is kept
        """
        try:
            posts = parse_corpus(text, source_name=source_name)
        except CorpusLoadError as e:
            self._record_failure(e, source_name)
            raise
        return self.replace(posts, source=source_name)

    async def load_file(self, path: str | Path) -> CorpusGeneration:
        """
        Read a corpus file and install it.

        Raises:
            CorpusLoadError: If reading or decoding fails; the current generation is kept
        """
        path = Path(path)
        try:
            posts = await read_corpus_file(path)
        except CorpusLoadError as e:
            self._record_failure(e, str(path))
            raise
        return self.replace(posts, source=str(path))

    def get_post(self, index: int) -> Post:
        """
        Look up a post by position in the current generation.

        Raises:
            NotFoundError: If the index is outside the corpus
        """
        posts = self._current.posts
        if index < 0 or index >= len(posts):
            raise NotFoundError(
                f"Post {index} not found",
                context={"index": index, "generation": self._current.generation},
            )
        return posts[index]

    def _record_failure(self, error: CorpusLoadError, source: str | None) -> None:
        self.last_error = error.message
        logger.error(
            f"Corpus load from {source or 'text'} failed, keeping generation "
            f"{self._current.generation}: {error.message}"
        )
