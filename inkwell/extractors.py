"""Metadata extractors for inkwell.

This module contains implementations of the MetadataExtractor protocol.
Each extractor derives a single piece of consumer-facing metadata from a
document's front matter, body and location.

Key classes:
- TitleExtractor: Title from front matter or filename.
- DateExtractor: Date from front matter, filename or file metadata.
- CategoryExtractor: Categories from ``categories``/``category``.
- SlugExtractor: URL slug from front matter or filename.
- ExcerptExtractor: Body text up to the excerpt separator.
- FlagsExtractor: Post/page kind, draft and published flags.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from .utils import (
    extract_date_from_name,
    parse_date,
    slugify,
    split_categories,
    titleize,
)

logger = logging.getLogger(__name__)

POSTS_DIR = "_posts"
DRAFTS_DIR = "_drafts"
FALSE_VALUES = ("false", "no", "off")


def is_draft_path(path: Path) -> bool:
    return DRAFTS_DIR in path.parts[:-1]


def is_post_path(path: Path) -> bool:
    return POSTS_DIR in path.parts[:-1] or is_draft_path(path)


class TitleExtractor:
    """Uses the ``title`` key, falling back to titleizing the filename."""

    def extract(self, front_matter: Mapping[str, Any], body: str, path: Path) -> dict[str, Any]:
        title = front_matter.get("title")
        if isinstance(title, str) and title.strip():
            return {"title": title.strip()}
        return {"title": titleize(path.name)}


class DateExtractor:
    """Extracts the publication date.

    Looks at the ``date`` key first, then a YYYY-MM-DD filename prefix.
    Drafts carry no date in their name, so they fall back to the file
    modification time. Pages without either have no date.
    """

    def extract(self, front_matter: Mapping[str, Any], body: str, path: Path) -> dict[str, Any]:
        raw = front_matter.get("date")
        if isinstance(raw, str) and raw.strip():
            parsed = parse_date(raw)
            if parsed is not None:
                return {"date": parsed}
            logger.warning("%s: unrecognized date %r, using filename date", path, raw)

        date = extract_date_from_name(path.stem)
        if date is None and is_draft_path(path):
            date = datetime.fromtimestamp(path.stat().st_mtime)
        return {"date": date}


class CategoryExtractor:
    """Merges ``categories`` and the singular ``category`` key."""

    def extract(self, front_matter: Mapping[str, Any], body: str, path: Path) -> dict[str, Any]:
        categories = split_categories(front_matter.get("categories"))
        single = split_categories(front_matter.get("category"))
        merged = categories + tuple(c for c in single if c not in categories)
        return {"categories": merged}


class SlugExtractor:
    def extract(self, front_matter: Mapping[str, Any], body: str, path: Path) -> dict[str, Any]:
        slug = front_matter.get("slug")
        if isinstance(slug, str) and slug.strip():
            return {"slug": slugify(slug)}
        return {"slug": slugify(path.stem)}


class ExcerptExtractor:
    """Extracts the excerpt: the body up to the first excerpt separator.

    An explicit ``excerpt`` key wins. A per-document ``excerpt_separator``
    overrides the site-wide separator.

    Attributes:
        separator: Site-wide separator, a blank line by default.
    """

    def __init__(self, separator: str = "\n\n"):
        self.separator = separator

    def extract(self, front_matter: Mapping[str, Any], body: str, path: Path) -> dict[str, Any]:
        explicit = front_matter.get("excerpt")
        if isinstance(explicit, str):
            return {"excerpt": explicit.strip()}
        separator = front_matter.get("excerpt_separator")
        if not isinstance(separator, str) or not separator:
            separator = self.separator
        text = body.replace("\r\n", "\n").lstrip("\n")
        if separator:
            text = text.split(separator, 1)[0]
        return {"excerpt": text.strip()}


class FlagsExtractor:
    """Sets ``kind``, ``draft`` and ``published`` from location and front matter."""

    def extract(self, front_matter: Mapping[str, Any], body: str, path: Path) -> dict[str, Any]:
        published = front_matter.get("published", "true")
        return {
            "kind": "post" if is_post_path(path) else "page",
            "draft": is_draft_path(path),
            "published": str(published).strip().lower() not in FALSE_VALUES,
        }


class CompositeMetadataExtractor:
    """Combines multiple metadata extractors.

    Runs every registered extractor and merges their results; later
    extractors override keys set by earlier ones.
    """

    def __init__(self, extractors: list | None = None, excerpt_separator: str = "\n\n"):
        """Initialize with a list of extractors.

        Args:
            extractors: MetadataExtractor implementations. If None, uses
                the default set.
            excerpt_separator: Separator for the default ExcerptExtractor.
        """
        if extractors is None:
            self._extractors = [
                FlagsExtractor(),
                TitleExtractor(),
                DateExtractor(),
                CategoryExtractor(),
                SlugExtractor(),
                ExcerptExtractor(excerpt_separator),
            ]
        else:
            self._extractors = list(extractors)

    def add_extractor(self, extractor) -> None:
        self._extractors.append(extractor)

    def extract(self, front_matter: Mapping[str, Any], body: str, path: Path) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for extractor in self._extractors:
            result.update(extractor.extract(front_matter, body, path))
        return result
