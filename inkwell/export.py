"""JSON export of the content store.

The exported payload is what an external renderer consumes: one record per
document, in load order.
"""

from __future__ import annotations

import json
from typing import IO, Any

from .content import Document
from .store import ContentStore


def document_to_dict(doc: Document, include_body: bool = True) -> dict[str, Any]:
    """Convert a document to a JSON-serializable dict."""
    record: dict[str, Any] = {
        "path": doc.path,
        "kind": doc.kind,
        "title": doc.title,
        "date": doc.date.isoformat() if doc.date else None,
        "slug": doc.slug,
        "url": doc.url,
        "categories": list(doc.categories),
        "draft": doc.draft,
        "published": doc.published,
        "front_matter": dict(doc.front_matter),
        "excerpt": doc.excerpt,
    }
    if include_body:
        record["body"] = doc.body
    return record


def export_store(store: ContentStore, include_body: bool = True) -> dict[str, Any]:
    """Build the export payload for a whole store."""
    documents = [document_to_dict(doc, include_body) for doc in store.list()]
    return {
        "documents": documents,
        "categories": {
            name: docs.paths() for name, docs in store.categories().items()
        },
    }


def dumps_json(store: ContentStore, include_body: bool = True) -> str:
    return json.dumps(export_store(store, include_body), indent=2, ensure_ascii=False)


def dump_json(store: ContentStore, fp: IO[str], include_body: bool = True) -> None:
    fp.write(dumps_json(store, include_body))
    fp.write("\n")
