"""inkwell: a front matter content store for Jekyll-style blogs.

This package reads blog sources (Markdown or HTML files that start with a
``---`` delimited YAML front matter block), validates them, and exposes the
resulting documents to an external renderer through lookup by path and an
ordered listing.

The main entry points are ContentStore.load / ContentStore.from_site for
library use and the ``inkwell`` CLI for checking and exporting a site.
"""

__all__ = [
    "ContentError",
    "ContentStore",
    "Document",
    "DuplicateDocumentError",
    "MalformedFrontMatterError",
    "NotFoundError",
    "__version__",
    "load",
]
__version__ = "0.1.0"

from .content import Document  # noqa: E402
from .errors import (  # noqa: E402
    ContentError,
    DuplicateDocumentError,
    MalformedFrontMatterError,
    NotFoundError,
)
from .store import ContentStore, load  # noqa: E402
