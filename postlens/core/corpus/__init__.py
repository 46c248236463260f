"""
Corpus module for acquiring and holding the post collection.

Loads are replace-the-world: a new generation is fully decoded before it
replaces the previous one.
"""

from postlens.core.corpus.loader import parse_corpus, parse_json, parse_jsonl, read_corpus_file
from postlens.core.corpus.store import CorpusGeneration, CorpusStore, build_tag_universe

__all__ = [
    "CorpusStore",
    "CorpusGeneration",
    "build_tag_universe",
    "parse_corpus",
    "parse_json",
    "parse_jsonl",
    "read_corpus_file",
]
