"""
Tests for CorpusStore.

Tests generation swapping, tag universe derivation and failed-load isolation.
"""

import pytest

from postlens.core.corpus import CorpusStore, build_tag_universe
from postlens.utils.exceptions import CorpusLoadError, NotFoundError


@pytest.mark.unit
class TestTagUniverse:
    """Tests for tag universe derivation."""

    def test_sorted_deduplicated_union(self, post_factory):
        """Test values are unioned, deduplicated and sorted."""
        posts = [post_factory(models=["b"]), post_factory(models=["a", "b"])]

        universe = build_tag_universe(posts)

        assert universe.models == ("a", "b")
        assert universe.topics == ()
        assert universe.assignments == ()

    def test_all_groups(self, sample_posts):
        """Test every facet group is collected."""
        universe = build_tag_universe(sample_posts)

        assert universe.models == ("claude", "gpt4")
        assert universe.topics == ("code_review", "math_proofs")
        assert universe.assignments == ("weekly_assignment",)

    def test_empty_corpus(self):
        """Test an empty corpus has an empty universe."""
        universe = build_tag_universe([])

        assert universe.models == universe.topics == universe.assignments == ()


@pytest.mark.unit
class TestCorpusStore:
    """Tests for generation management."""

    def test_initial_state(self):
        """Test a new store is empty at generation 0."""
        store = CorpusStore()

        assert store.current.generation == 0
        assert store.posts == ()
        assert store.last_error is None

    def test_replace_installs_new_generation(self, sample_posts):
        """Test replace swaps the whole corpus and bumps the generation."""
        store = CorpusStore()

        first = store.replace(sample_posts, source="a")
        second = store.replace(sample_posts[:1], source="b")

        assert first.generation == 1
        assert second.generation == 2
        assert len(store.posts) == 1
        assert store.current.source == "b"
        # Earlier snapshot is unaffected
        assert len(first.posts) == 3

    def test_tag_universe_follows_corpus(self, sample_posts, post_factory):
        """Test the universe is recomputed on each load."""
        store = CorpusStore()
        store.replace(sample_posts)
        store.replace([post_factory(models=["solo"])])

        assert store.tag_universe.models == ("solo",)
        assert store.tag_universe.topics == ()

    def test_load_text(self, jsonl_text):
        """Test decoding and installing text."""
        store = CorpusStore()

        generation = store.load_text(jsonl_text, source_name="upload.jsonl")

        assert len(generation) == 3
        assert generation.source == "upload.jsonl"
        assert generation.loaded_at is not None

    def test_failed_load_keeps_previous_generation(self, loaded_store):
        """Test a bad load leaves the corpus untouched and records the error."""
        before = loaded_store.current

        with pytest.raises(CorpusLoadError):
            loaded_store.load_text('{"title": "ok"}\nbroken', source_name="bad.jsonl")

        assert loaded_store.current is before
        assert "line 2" in loaded_store.last_error

    def test_successful_load_clears_error(self, loaded_store, jsonl_text):
        """Test last_error resets after a good load."""
        with pytest.raises(CorpusLoadError):
            loaded_store.load_text("{bad")

        loaded_store.load_text(jsonl_text, source_name="good.jsonl")

        assert loaded_store.last_error is None

    def test_get_post(self, loaded_store):
        """Test index lookup and out-of-range errors."""
        assert loaded_store.get_post(1).author_name == "Grace Hopper"

        with pytest.raises(NotFoundError):
            loaded_store.get_post(3)
        with pytest.raises(NotFoundError):
            loaded_store.get_post(-1)


@pytest.mark.asyncio
class TestCorpusStoreFiles:
    """Tests for loading from files."""

    async def test_load_file(self, tmp_path, jsonl_text):
        """Test loading a corpus file."""
        path = tmp_path / "posts.jsonl"
        path.write_text(jsonl_text, encoding="utf-8")
        store = CorpusStore()

        generation = await store.load_file(path)

        assert generation.generation == 1
        assert len(store.posts) == 3

    async def test_missing_file_keeps_corpus(self, loaded_store, tmp_path):
        """Test an unreadable file does not disturb the current corpus."""
        with pytest.raises(CorpusLoadError):
            await loaded_store.load_file(tmp_path / "missing.jsonl")

        assert len(loaded_store.posts) == 3
        assert loaded_store.last_error is not None
