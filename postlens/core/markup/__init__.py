"""
Markup module for extracting media references from post bodies.

Malformed markup never raises: it yields an empty ParsedMarkup.
"""

from postlens.core.markup.parser import EMPTY_MARKUP, parse_markup

__all__ = ["parse_markup", "EMPTY_MARKUP"]
