"""Shared fixtures for PostLens tests.

Fixtures build small in-memory corpora; no external services are needed.
"""

import json

import pytest

from postlens.config import Config
from postlens.core.corpus import CorpusStore
from postlens.models import Post


def make_post(
    title: str | None = None,
    author: str | None = None,
    models: list[str] | None = None,
    topics: list[str] | None = None,
    assignments: list[str] | None = None,
    **fields,
) -> Post:
    """Build a Post from friendly keyword arguments."""
    record = dict(fields)
    if title is not None:
        record["title"] = title
    if author is not None:
        record["author_name"] = author

    metadata = {}
    if models is not None:
        metadata["model_ids"] = models
    if topics is not None:
        metadata["topic_category_ids"] = topics
    if assignments is not None:
        metadata["post_type_category_ids"] = assignments
    if metadata:
        record["cluster_metadata"] = metadata

    return Post.model_validate(record)


@pytest.fixture
def config() -> Config:
    """Default configuration."""
    return Config()


@pytest.fixture
def sample_records() -> list[dict]:
    """Raw corpus records as they appear in posts.jsonl."""
    return [
        {
            "title": "Prompting GPT-4 for proofs",
            "author_name": "Ada Lovelace",
            "created_at": "2024-03-01T10:00:00Z",
            "document": "Step one:\nStep two",
            "raw": {
                "content": "<post><image src='step1.png'/><link href='https://example.com'>paper</link></post>"
            },
            "cluster_metadata": {
                "model_ids": ["gpt4"],
                "topic_category_ids": ["math_proofs"],
                "post_type_category_ids": ["weekly_assignment"],
            },
        },
        {
            "title": "Claude on code review",
            "author_name": "Grace Hopper",
            "created_at": 1709290800000,
            "raw": {"document": "Para one.\n\nPara two.\nwith break."},
            "cluster_metadata": {
                "model_ids": ["claude", "gpt4"],
                "topic_category_ids": ["code_review"],
            },
        },
        {
            "author_name": "Anonymous",
            "created_at": "not a date",
            "raw": {"content": "not xml <<<"},
        },
    ]


@pytest.fixture
def sample_posts(sample_records) -> list[Post]:
    """Decoded sample corpus."""
    return [Post.model_validate(record) for record in sample_records]


@pytest.fixture
def jsonl_text(sample_records) -> str:
    """Sample corpus encoded as JSONL."""
    return "\n".join(json.dumps(record) for record in sample_records) + "\n"


@pytest.fixture
def loaded_store(sample_posts) -> CorpusStore:
    """Corpus store holding the sample corpus."""
    store = CorpusStore()
    store.replace(sample_posts, source="fixture")
    return store


@pytest.fixture
def post_factory():
    """Factory building posts from friendly keyword arguments."""
    return make_post
