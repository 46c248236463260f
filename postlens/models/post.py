"""
Post model for corpus records.

Posts arrive as loosely-shaped JSON records. Every field is optional and
absence is a normal state, so each accessor states its own fallback. A
field holding the wrong JSON type is treated as absent instead of failing
the record.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FacetGroup(str, Enum):
    """Tag dimensions usable as multi-select filters."""

    MODELS = "models"
    TOPICS = "topics"
    ASSIGNMENTS = "assignments"


def _text_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _object_or_none(value: Any) -> Any:
    return value if isinstance(value, (dict, BaseModel)) else None


class RawContent(BaseModel):
    """Raw payload carried alongside a post."""

    model_config = ConfigDict(extra="ignore")

    document: str | None = Field(default=None, description="Fallback plain body text")
    content: str | None = Field(default=None, description="Markup body with media references")

    @field_validator("document", "content", mode="before")
    @classmethod
    def _drop_non_text(cls, value: Any) -> str | None:
        return _text_or_none(value)


class ClusterMetadata(BaseModel):
    """Facet ids attached to a post."""

    model_config = ConfigDict(extra="ignore", protected_namespaces=())

    model_ids: list[str] | None = Field(default=None, description="Model facet ids")
    topic_category_ids: list[str] | None = Field(default=None, description="Topic facet ids")
    post_type_category_ids: list[str] | None = Field(
        default=None, description="Assignment facet ids"
    )

    @field_validator("model_ids", "topic_category_ids", "post_type_category_ids", mode="before")
    @classmethod
    def _keep_string_ids(cls, value: Any) -> list[str] | None:
        """Non-list values are absent; non-string members are dropped."""
        if not isinstance(value, (list, tuple)):
            return None
        return [item for item in value if isinstance(item, str)]


class Facets(BaseModel):
    """Normalized view of a post's facet values, one sequence per group."""

    model_config = ConfigDict(frozen=True)

    models: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()
    assignments: tuple[str, ...] = ()

    def values(self, group: FacetGroup) -> tuple[str, ...]:
        """Return the values for one facet group."""
        return getattr(self, group.value)


class Post(BaseModel):
    """
    Authored document in the corpus.

    Mirrors the record shape of the corpus files. Unknown fields are dropped;
    missing or wrongly typed fields default to absent. `created_at` may be an
    ISO string or a numeric epoch value in milliseconds.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, description="Post title")
    author_name: str | None = Field(default=None, description="Author display name")
    created_at: str | int | float | None = Field(
        default=None, description="Creation timestamp (ISO string or epoch ms)"
    )
    document: str | None = Field(default=None, description="Plain body text")
    raw: RawContent | None = Field(default=None, description="Raw payload")
    cluster_metadata: ClusterMetadata | None = Field(default=None, description="Facet ids")

    @field_validator("title", "author_name", "document", mode="before")
    @classmethod
    def _drop_non_text(cls, value: Any) -> str | None:
        return _text_or_none(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _drop_non_timestamp(cls, value: Any) -> str | int | float | None:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return None
        return value

    @field_validator("raw", "cluster_metadata", mode="before")
    @classmethod
    def _drop_non_object(cls, value: Any) -> Any:
        return _object_or_none(value)

    @property
    def body_text(self) -> str | None:
        """
        Plain body text.

        Returns:
            `document` when present, else `raw.document`, else None
        """
        if self.document is not None:
            return self.document
        if self.raw is not None:
            return self.raw.document
        return None

    @property
    def markup_content(self) -> str | None:
        """Markup body (`raw.content`), if any."""
        return self.raw.content if self.raw is not None else None

    @property
    def facets(self) -> Facets:
        """
        Facet values grouped by dimension.

        A missing `cluster_metadata` or group yields an empty sequence.
        """
        metadata = self.cluster_metadata
        if metadata is None:
            return Facets()
        return Facets(
            models=tuple(metadata.model_ids or ()),
            topics=tuple(metadata.topic_category_ids or ()),
            assignments=tuple(metadata.post_type_category_ids or ()),
        )

    @property
    def created_date(self) -> datetime | None:
        """Parsed creation timestamp, or None when absent or invalid."""
        return parse_timestamp(self.created_at)


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a corpus timestamp.

    Numbers are epoch milliseconds; strings are ISO-8601 dates or date-times.
    Falsy, unparsable and non-scalar values yield None rather than raising.

    Args:
        value: Raw `created_at` value

    Returns:
        Timezone-aware datetime for numbers, parsed datetime for strings, or None
    """
    if not value or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str):
        return None

    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None
