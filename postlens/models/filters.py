"""
Filter criteria and tag universe models.

Criteria are immutable values: every user action (set a query, toggle a
facet value, clear) returns a new FilterCriteria instead of mutating one.
"""

from pydantic import BaseModel, ConfigDict, Field

from postlens.models.post import FacetGroup


class FilterCriteria(BaseModel):
    """
    Compound filter over the corpus.

    Empty strings and empty sets impose no constraint on their dimension.
    """

    model_config = ConfigDict(frozen=True)

    title_query: str = Field(default="", description="Case-insensitive title substring")
    author_query: str = Field(default="", description="Case-insensitive author substring")
    selected_models: frozenset[str] = Field(default_factory=frozenset)
    selected_topics: frozenset[str] = Field(default_factory=frozenset)
    selected_assignments: frozenset[str] = Field(default_factory=frozenset)

    def selected(self, group: FacetGroup) -> frozenset[str]:
        """Return the selected values for one facet group."""
        return getattr(self, f"selected_{group.value}")

    def is_empty(self) -> bool:
        """
        Check whether the criteria constrain anything.

        Returns:
            True if both queries are blank and no facet value is selected
        """
        return (
            not self.title_query.strip()
            and not self.author_query.strip()
            and not any(self.selected(group) for group in FacetGroup)
        )

    def with_title(self, query: str) -> "FilterCriteria":
        return self.model_copy(update={"title_query": query})

    def with_author(self, query: str) -> "FilterCriteria":
        return self.model_copy(update={"author_query": query})

    def toggle(self, group: FacetGroup, value: str) -> "FilterCriteria":
        """
        Add or remove one facet value.

        Args:
            group: Facet group to toggle in
            value: Raw facet id (never the display label)

        Returns:
            New criteria with the value flipped in the group's selection
        """
        current = self.selected(group)
        updated = current - {value} if value in current else current | {value}
        return self.model_copy(update={f"selected_{group.value}": updated})

    def cleared(self) -> "FilterCriteria":
        return FilterCriteria()


class TagUniverse(BaseModel):
    """All distinct facet values observed in a corpus, sorted per group."""

    model_config = ConfigDict(frozen=True)

    models: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()
    assignments: tuple[str, ...] = ()

    def values(self, group: FacetGroup) -> tuple[str, ...]:
        return getattr(self, group.value)
