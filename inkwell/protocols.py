"""Protocol definitions for inkwell.

The store depends on these small interfaces rather than on the concrete
loaders and builders, so tests and callers can swap either side.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import Document


@runtime_checkable
class MetadataExtractor(Protocol):
    """Derives one kind of metadata from a parsed source.

    Implementations extract a single concern (title, date, categories, ...)
    and are combined by CompositeMetadataExtractor.
    """

    @abstractmethod
    def extract(self, front_matter: Mapping[str, Any], body: str, path: Path) -> dict[str, Any]:
        """Extract metadata.

        Args:
            front_matter: Parsed front matter.
            body: Document body.
            path: Path to the source file.

        Returns:
            Dictionary of extracted metadata.
        """
        ...


@runtime_checkable
class ContentLoader(Protocol):
    """Discovers content source files."""

    @abstractmethod
    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        """Return content source files in discovery order.

        Args:
            include_drafts: Whether to include files under ``_drafts``.
        """
        ...


@runtime_checkable
class DocumentBuilder(Protocol):
    """Builds Document records from source files."""

    @abstractmethod
    def build(self, source: Path, key: str) -> Document:
        """Build a Document.

        Args:
            source: Path to read.
            key: Identifier the document is stored under.
        """
        ...
