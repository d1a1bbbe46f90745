"""The content store: documents keyed by path.

A ContentStore is produced once by ``load`` (or ``from_site``) and is
read-only afterwards. Consumers look documents up with ``get`` and walk
them with ``list``.

Example:
    >>> store = ContentStore.from_site(Path("blog"))
    >>> store.get("about.md").front_matter["permalink"]
    '/about/'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path, PurePath
from typing import Any

from .collections import CategoryIndex, DocumentCollection
from .config import load_config
from .content import DefaultDocumentBuilder, Document, FileContentLoader
from .errors import DuplicateDocumentError, NotFoundError
from .protocols import ContentLoader, DocumentBuilder
from .utils import build_categories_index

logger = logging.getLogger(__name__)


def document_key(path: str | PurePath, root: Path | None = None) -> str:
    """Return the identifier a source path is stored under.

    Args:
        path: Source path.
        root: Optional site root; the key is then relative to it.
    """
    candidate = Path(path)
    if root is not None:
        try:
            candidate = candidate.relative_to(root)
        except ValueError:
            pass
    return candidate.as_posix()


class ContentStore:
    """Holds a set of documents and exposes lookup by path.

    Documents keep the order in which their sources were given.

    Attributes:
        root: Site root the document paths are relative to, if any.
    """

    def __init__(self, documents: Iterable[Document] = (), root: Path | None = None):
        self.root = root
        self._documents: dict[str, Document] = {}
        for doc in documents:
            if doc.path in self._documents:
                raise DuplicateDocumentError(doc.path)
            self._documents[doc.path] = doc

    @classmethod
    def load(
        cls,
        source_paths: Iterable[str | Path],
        root: Path | None = None,
        config: dict[str, Any] | None = None,
        builder: DocumentBuilder | None = None,
    ) -> ContentStore:
        """Read every source and build a store from them.

        Args:
            source_paths: Files to read, in the order they should be listed.
            root: Optional site root; document paths become relative to it.
            config: Site configuration used for derived metadata.
            builder: Optional custom document builder.

        Returns:
            A new ContentStore.

        Raises:
            MalformedFrontMatterError: If any source has malformed front matter.
            DuplicateDocumentError: If two sources map to the same path.
        """
        builder = builder or DefaultDocumentBuilder(config)

        def documents() -> Iterator[Document]:
            for source in source_paths:
                source = Path(source)
                key = document_key(source, root)
                logger.debug("Loading %s", key)
                yield builder.build(source, key)

        store = cls(documents(), root=root)
        logger.debug("Loaded %d documents", len(store))
        return store

    @classmethod
    def from_site(
        cls,
        site_dir: Path,
        config: dict[str, Any] | None = None,
        include_drafts: bool = False,
        loader: ContentLoader | None = None,
    ) -> ContentStore:
        """Discover and load every source under a site directory.

        Args:
            site_dir: Root directory of the site sources.
            config: Site configuration; read from ``_config.yml`` if None.
            include_drafts: Whether to include ``_drafts``.
            loader: Optional custom source discovery.
        """
        site_dir = Path(site_dir)
        if not site_dir.is_dir():
            raise FileNotFoundError(f"Expected site directory at {site_dir}")
        if config is None:
            config = load_config(site_dir)
        loader = loader or FileContentLoader(site_dir, config)
        sources = loader.iter_files(include_drafts)
        return cls.load(sources, root=site_dir, config=config)

    def get(self, path: str | PurePath) -> Document:
        """Return the document stored under ``path``.

        Raises:
            NotFoundError: If no document has that path.
        """
        key = path if isinstance(path, str) else path.as_posix()
        doc = self._documents.get(key)
        if doc is None:
            # Absolute or site-prefixed paths resolve against the root.
            doc = self._documents.get(document_key(path, self.root))
        if doc is None:
            raise NotFoundError(key)
        return doc

    def list(self) -> DocumentCollection:
        """Return all documents in load order.

        The result is a lazy view; iterating it again starts over.
        """
        return DocumentCollection(self._documents.values())

    def categories(self) -> CategoryIndex:
        return CategoryIndex(build_categories_index(self._documents.values()))

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, PurePath)):
            return False
        try:
            self.get(path)
        except NotFoundError:
            return False
        return True

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"ContentStore({len(self._documents)} documents)"


def load(source_paths: Iterable[str | Path], **kwargs) -> ContentStore:
    """Shortcut for ContentStore.load."""
    return ContentStore.load(source_paths, **kwargs)
