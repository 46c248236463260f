"""
Faceted filtering over a corpus.

A post is kept when every active condition holds:
- title / author contain the trimmed query, case-insensitively
- for each facet group with a selection, the post has at least one
  selected value (OR within a group, AND across groups)

Filtering is pure and order-preserving.
"""

from collections.abc import Iterable

from postlens.models.filters import FilterCriteria
from postlens.models.post import FacetGroup, Post


def _contains(value: str | None, query: str) -> bool:
    """Case-insensitive substring check; an absent value never matches."""
    return value is not None and query in value.lower()


def post_matches(post: Post, criteria: FilterCriteria) -> bool:
    """
    Check one post against the criteria.

    Args:
        post: Post to test
        criteria: Active filter criteria

    Returns:
        True if the post satisfies every non-empty dimension
    """
    title_query = criteria.title_query.strip().lower()
    if title_query and not _contains(post.title, title_query):
        return False

    author_query = criteria.author_query.strip().lower()
    if author_query and not _contains(post.author_name, author_query):
        return False

    facets = post.facets
    for group in FacetGroup:
        selected = criteria.selected(group)
        if selected and selected.isdisjoint(facets.values(group)):
            return False

    return True


def filter_posts(corpus: Iterable[Post], criteria: FilterCriteria) -> list[Post]:
    """
    Narrow a corpus to the posts matching the criteria.

    Args:
        corpus: Posts in corpus order
        criteria: Filter criteria; empty criteria keep every post

    Returns:
        Matching posts in their original order
    """
    return [post for post in corpus if post_matches(post, criteria)]
