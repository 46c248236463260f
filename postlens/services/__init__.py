"""
Services for PostLens.

- filter_posts / post_matches: Faceted filter engine
- PostBrowser: Listing, tag and detail views over the corpus store
"""

from postlens.services.facet_filter import filter_posts, post_matches
from postlens.services.post_browser import (
    PostBrowser,
    PostCard,
    PostDetail,
    PostListing,
    TagGroups,
    date_label,
    normalize_tag_label,
    preview_text,
)

__all__ = [
    "filter_posts",
    "post_matches",
    "PostBrowser",
    "PostCard",
    "PostDetail",
    "PostListing",
    "TagGroups",
    "date_label",
    "normalize_tag_label",
    "preview_text",
]
