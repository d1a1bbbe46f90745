from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Mapping, Sequence
from datetime import datetime

from .content import Document


class DocumentCollection(Sequence[Document]):
    """Read-only, restartable view over documents.

    Wrapping a sized collection (such as a dict values view) keeps the view
    lazy: nothing is copied until indexing needs a snapshot. Any other
    iterable is materialized once.
    """

    def __init__(self, documents: Iterable[Document]):
        if isinstance(documents, Collection) and not isinstance(documents, Iterator):
            self._documents: Collection[Document] = documents
        else:
            self._documents = tuple(documents)
        self._snapshot: tuple[Document, ...] | None = None

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, item):
        if self._snapshot is None:
            self._snapshot = tuple(self._documents)
        result = self._snapshot[item]
        if isinstance(item, slice):
            return DocumentCollection(result)
        return result

    def paths(self) -> list[str]:
        return [doc.path for doc in self]

    def posts(self) -> DocumentCollection:
        return DocumentCollection(d for d in self if d.kind == "post")

    def pages(self) -> DocumentCollection:
        return DocumentCollection(d for d in self if d.kind == "page")

    def drafts(self) -> DocumentCollection:
        return DocumentCollection(d for d in self if d.draft)

    def published(self) -> DocumentCollection:
        return DocumentCollection(d for d in self if d.published and not d.draft)

    def in_category(self, name: str) -> DocumentCollection:
        return DocumentCollection(d for d in self if name in d.categories)

    def with_layout(self, name: str) -> DocumentCollection:
        return DocumentCollection(d for d in self if d.layout == name)

    def sorted(self, reverse: bool = True) -> DocumentCollection:
        """Sort documents by date, then by filename.

        Undated documents sort as the oldest.

        Args:
            reverse: If True (default), newest first.

        Returns:
            A new DocumentCollection with sorted documents.
        """

        def sort_key(d: Document):
            return (d.date or datetime.min, d.filename.lower())

        return DocumentCollection(sorted(self, key=sort_key, reverse=reverse))

    def latest(self, count: int = 5) -> DocumentCollection:
        return self.sorted()[:count]

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"DocumentCollection({len(self)} documents)"


class CategoryIndex(Mapping[str, DocumentCollection]):
    """Mapping of category name to the documents filed under it."""

    def __init__(self, mapping: dict[str, Iterable[Document]]):
        self._mapping = {k: DocumentCollection(v) for k, v in mapping.items()}

    def __getitem__(self, key: str) -> DocumentCollection:
        return self._mapping[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"CategoryIndex({len(self._mapping)} categories)"
