"""Exceptions raised by inkwell.

All errors derive from ContentError so callers can catch everything the
content store raises with a single except clause.
"""

from __future__ import annotations

from pathlib import Path


class ContentError(Exception):
    """Base class for content store errors."""


class MalformedFrontMatterError(ContentError):
    """Front matter is missing, unbalanced, or not a well-formed mapping.

    Attributes:
        source_path: Path (or identifier) of the offending source.
        message: Human-readable error message.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        source_path: str | Path | None,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        prefix = f"{source_path}: " if source_path is not None else ""
        super().__init__(f"{prefix}{message}")


class NotFoundError(ContentError, LookupError):
    """No document is stored under the requested path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No document at {path!r}")


class DuplicateDocumentError(ContentError):
    """Two sources resolved to the same document path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Document {path!r} was loaded more than once")


class ConfigError(ContentError):
    """The site configuration file could not be read."""
