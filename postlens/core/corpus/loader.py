"""
Corpus decoding and acquisition.

Corpus text is either newline-delimited JSON (one post per non-blank line)
or a single JSON value holding an array of posts or one bare post. Any
decoding failure aborts the whole load with CorpusLoadError; a partial
corpus is never returned.
"""

import asyncio
import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from postlens.models.post import Post
from postlens.utils.exceptions import CorpusLoadError
from postlens.utils.logger import get_logger

logger = get_logger(__name__)

JSONL_SUFFIX = ".jsonl"
BOM = "\ufeff"


def _to_post(record: Any, position: int) -> Post:
    if not isinstance(record, dict):
        raise CorpusLoadError(
            f"Record {position} is not a JSON object",
            context={"position": position, "type": type(record).__name__},
        )
    try:
        return Post.model_validate(record)
    except ValidationError as e:
        raise CorpusLoadError(
            f"Record {position} has invalid fields: {e}",
            context={"position": position},
        ) from e


def parse_jsonl(text: str) -> list[Post]:
    """
    Decode newline-delimited JSON into posts.

    Blank lines are skipped. Each remaining line is decoded independently.

    Args:
        text: Corpus text

    Returns:
        Posts in line order

    Raises:
        CorpusLoadError: If any line is not a valid JSON object
    """
    posts = []
    lines = [line for line in text.strip().split("\n") if line.strip()]
    for index, line in enumerate(lines, start=1):
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            raise CorpusLoadError(
                f"Invalid JSON on line {index}: {e}", context={"line": index}
            ) from e
        posts.append(_to_post(record, index))
    return posts


def parse_json(text: str) -> list[Post]:
    """
    Decode a single JSON value into posts.

    An array yields one post per element; any other value is wrapped
    into a one-element corpus.

    Raises:
        CorpusLoadError: If the text is not valid JSON or a record is not an object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorpusLoadError(f"Invalid JSON: {e}") from e

    records = data if isinstance(data, list) else [data]
    return [_to_post(record, index) for index, record in enumerate(records, start=1)]


def parse_corpus(text: str, source_name: str | None = None) -> list[Post]:
    """
    Decode corpus text, choosing the format from its shape and source name.

    A leading byte-order mark is dropped. Single-value JSON is used only
    when the trimmed text is one line and the source name does not end in
    `.jsonl`; everything else is JSONL.

    Args:
        text: Corpus text
        source_name: File name or URL the text came from, if known

    Returns:
        Decoded posts

    Raises:
        CorpusLoadError: If the text cannot be decoded
    """
    text = text.removeprefix(BOM)
    lines = text.strip().split("\n")
    is_jsonl_source = bool(source_name) and source_name.lower().endswith(JSONL_SUFFIX)

    if len(lines) > 1 or is_jsonl_source:
        posts = parse_jsonl(text)
    else:
        posts = parse_json(text)

    logger.debug(f"Decoded {len(posts)} posts from {source_name or 'text'}")
    return posts


async def read_corpus_file(path: str | Path) -> list[Post]:
    """
    Read and decode a corpus file.

    The file is read in a worker thread so the event loop is not blocked.

    Args:
        path: Path to a .jsonl or .json corpus file

    Returns:
        Decoded posts

    Raises:
        CorpusLoadError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        text = await asyncio.to_thread(path.read_text, encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusLoadError(
            f"Failed to read {path}: {e}", context={"path": str(path)}
        ) from e

    return parse_corpus(text, source_name=path.name)
