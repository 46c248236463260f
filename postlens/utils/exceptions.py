"""
Exception hierarchy for PostLens.

Everything raised on purpose derives from PostLensError and carries a
message plus a context dict for logs and API responses. Per-field problems
inside a record (wrongly typed fields, bad dates, malformed markup) are
absorbed where they are found and never reach this hierarchy.
"""


class PostLensError(Exception):
    """Base error with a human-readable message and structured context."""

    def __init__(self, message: str, context: dict | None = None):
        """
        Args:
            message: Error message
            context: Extra details (line number, path, index)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class CorpusLoadError(PostLensError):
    """
    Corpus text could not be read or decoded.

    The whole load is aborted and the previous corpus generation stays
    installed.
    """


class NotFoundError(PostLensError):
    """No post at the requested index of the current corpus."""


class ConfigurationError(PostLensError):
    """A configuration source holds an invalid value."""
