"""
Media reference extraction from markup bodies.

Markup bodies are XML-like element trees. Three tags are recognized
(case-insensitively): `image[src]`, `file[url]` and `link[href]`. Every
other tag is an inert container whose children are still visited.
"""

import xml.etree.ElementTree as ET

from postlens.models.content import LinkReference, ParsedMarkup
from postlens.utils.logger import get_logger

logger = get_logger(__name__)

EMPTY_MARKUP = ParsedMarkup()


def _local_name(tag: str) -> str:
    """Strip an `{namespace}` qualifier and lower-case the tag."""
    if tag.startswith("{"):
        tag = tag.rsplit("}", 1)[-1]
    return tag.lower()


def parse_markup(markup_text: str | None) -> ParsedMarkup:
    """
    Extract image, file and link references from a markup body.

    References are collected in pre-order (document order) across all
    nesting levels; duplicates are kept. Markup that cannot be parsed
    degrades to an empty result instead of raising.

    Args:
        markup_text: Markup body, possibly blank or malformed

    Returns:
        ParsedMarkup with images, files and links in document order
    """
    if not markup_text or not markup_text.strip():
        return EMPTY_MARKUP

    images: list[str] = []
    files: list[str] = []
    links: list[LinkReference] = []

    try:
        root = ET.fromstring(markup_text)

        for element in root.iter():
            # Comments and processing instructions carry a callable tag
            if not isinstance(element.tag, str):
                continue

            tag = _local_name(element.tag)
            if tag == "image":
                src = element.get("src")
                if src:
                    images.append(src)
            elif tag == "file":
                url = element.get("url")
                if url:
                    files.append(url)
            elif tag == "link":
                href = element.get("href")
                if href:
                    text = "".join(element.itertext())
                    links.append(LinkReference(url=href, text=text or None))
    except Exception as e:
        logger.debug(f"Markup could not be parsed, no media extracted: {e}")
        return EMPTY_MARKUP

    return ParsedMarkup(images=tuple(images), files=tuple(files), links=tuple(links))
