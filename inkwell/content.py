"""Content discovery and document building for inkwell.

This module turns source files into Document records: it discovers sources
under a site directory, splits their front matter, derives metadata and
works out the URL a renderer should publish each document at.

Key classes:
- Document: Immutable record of one content file.
- FileContentLoader: Discovers source files the way Jekyll does.
- UrlDeriver: Resolves permalinks for posts and pages.
- DefaultDocumentBuilder: Builds Document instances from source files.
"""

from __future__ import annotations

import fnmatch
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Any

from .config import DEFAULT_CONFIG
from .extractors import (
    DRAFTS_DIR,
    POSTS_DIR,
    CompositeMetadataExtractor,
)
from .frontmatter import parse_front_matter
from .utils import (
    extract_date_from_name,
    is_internal_name,
    is_source,
    parse_extensions,
)

logger = logging.getLogger(__name__)

OUTPUT_EXT = ".html"

PERMALINK_STYLES = {
    "date": "/:categories/:year/:month/:day/:title:output_ext",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "ordinal": "/:categories/:year/:y_day/:title:output_ext",
    "none": "/:categories/:title:output_ext",
}

PLACEHOLDER_RE = re.compile(r":([a-z_]+)")


@dataclass(frozen=True)
class Document:
    """One content file: front matter, body and derived metadata.

    Attributes:
        path: Identifier the document is stored under.
        front_matter: Read-only mapping of the front matter keys.
        body: Body text exactly as it appears after the front matter.
        source: Filesystem path the document was read from.
        title: Human-readable title.
        date: Publication date, if the document has one.
        slug: URL-friendly slug.
        categories: Categories in the order they were declared.
        kind: "post" or "page".
        draft: Whether the document lives under ``_drafts``.
        published: False when the front matter says ``published: false``.
        url: URL path the document should be published at.
        excerpt: Body text up to the excerpt separator.
    """

    path: str
    front_matter: Mapping[str, Any]
    body: str
    source: Path | None = None
    title: str = ""
    date: datetime | None = None
    slug: str = ""
    categories: tuple[str, ...] = ()
    kind: str = "page"
    draft: bool = False
    published: bool = True
    url: str = ""
    excerpt: str = field(default="", repr=False)

    def __post_init__(self):
        if not isinstance(self.front_matter, MappingProxyType):
            object.__setattr__(self, "front_matter", MappingProxyType(dict(self.front_matter)))

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def layout(self) -> str | None:
        return self.front_matter.get("layout")

    @property
    def filename(self) -> str:
        return PurePosixPath(self.path).name


class FileContentLoader:
    """Discovers content source files in a site directory.

    Files and directories starting with ``_`` or ``.`` are skipped, except
    ``_posts`` and, when drafts are requested, ``_drafts``. Entries matching
    the ``exclude`` setting are skipped unless they match ``include``.

    Attributes:
        site_dir: Directory containing site sources.
        config: Site configuration.
    """

    def __init__(self, site_dir: Path, config: dict[str, Any] | None = None):
        self.site_dir = site_dir
        self.config = config if config is not None else dict(DEFAULT_CONFIG)
        self.extensions = parse_extensions(
            self.config.get("markdown_ext", DEFAULT_CONFIG["markdown_ext"])
        )

    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        """Return all content source files, sorted by path.

        Args:
            include_drafts: Whether to include files under ``_drafts``.

        Returns:
            List of paths to content files.
        """
        files: list[Path] = []
        for path in sorted(self.site_dir.rglob("*")):
            if path.is_dir():
                continue
            rel = path.relative_to(self.site_dir)
            if not self._is_visible(rel, include_drafts):
                continue
            if not is_source(rel, self.extensions):
                continue
            if POSTS_DIR in rel.parts[:-1] and extract_date_from_name(rel.stem) is None:
                logger.warning("Skipping %s: post names must start with YYYY-MM-DD-", rel)
                continue
            files.append(path)
        return files

    def _is_visible(self, rel: Path, include_drafts: bool) -> bool:
        allowed = {POSTS_DIR, DRAFTS_DIR} if include_drafts else {POSTS_DIR}
        posix = rel.as_posix()
        if self._matches(posix, rel.parts, self.config.get("include") or []):
            return True
        for part in rel.parts[:-1]:
            if is_internal_name(part) and part not in allowed:
                return False
        if is_internal_name(rel.name):
            return False
        return not self._matches(posix, rel.parts, self.config.get("exclude") or [])

    def _matches(self, posix: str, parts: tuple[str, ...], patterns: list[str]) -> bool:
        for pattern in patterns:
            pattern = str(pattern).strip("/")
            if fnmatch.fnmatch(posix, pattern) or posix.startswith(f"{pattern}/"):
                return True
            if any(fnmatch.fnmatch(part, pattern) for part in parts):
                return True
        return False


class UrlDeriver:
    """Derives URLs for documents.

    An explicit ``permalink`` in the front matter always wins. Dated posts
    are expanded from the permalink style; pages (and undated posts) use
    their location in the site.

    Attributes:
        style: A style name from PERMALINK_STYLES or a template string.
    """

    def __init__(self, style: str = "date"):
        self.style = style or "date"

    @property
    def pretty(self) -> bool:
        return self.template.endswith("/")

    @property
    def template(self) -> str:
        return PERMALINK_STYLES.get(self.style, self.style)

    def derive(
        self,
        key: str,
        front_matter: Mapping[str, Any],
        kind: str,
        slug: str,
        categories: tuple[str, ...],
        date: datetime | None,
    ) -> str:
        """Derive the URL for a document.

        Args:
            key: Stored document path.
            front_matter: Parsed front matter.
            kind: "post" or "page".
            slug: Document slug.
            categories: Document categories.
            date: Publication date, if any.

        Returns:
            URL path starting with ``/``.
        """
        permalink = front_matter.get("permalink")
        if isinstance(permalink, str) and permalink.strip():
            return "/" + permalink.strip().lstrip("/")
        if kind == "post" and date is not None:
            return self._expand(self.template, slug, categories, date)
        return self._page_url(key)

    def _expand(
        self, template: str, slug: str, categories: tuple[str, ...], date: datetime
    ) -> str:
        values = {
            "categories": "/".join(re.sub(r"\s+", "-", c.lower()) for c in categories),
            "year": f"{date.year:04d}",
            "short_year": f"{date.year % 100:02d}",
            "month": f"{date.month:02d}",
            "i_month": str(date.month),
            "day": f"{date.day:02d}",
            "i_day": str(date.day),
            "y_day": f"{date.timetuple().tm_yday:03d}",
            "title": slug,
            "slug": slug,
            "output_ext": OUTPUT_EXT,
        }

        def repl(match: re.Match) -> str:
            name = match.group(1)
            return values.get(name, match.group(0))

        url = PLACEHOLDER_RE.sub(repl, template)
        url = re.sub(r"/{2,}", "/", url)
        return url if url.startswith("/") else f"/{url}"

    def _page_url(self, key: str) -> str:
        rel = PurePosixPath(key)
        parent = "" if str(rel.parent) in (".", "/") else rel.parent.as_posix().strip("/")
        if rel.stem == "index":
            return f"/{parent}/" if parent else "/"
        base = f"{parent}/{rel.stem}" if parent else rel.stem
        if self.pretty:
            return f"/{base}/"
        return f"/{base}{OUTPUT_EXT}"


class DefaultDocumentBuilder:
    """Builds Document objects from source files.

    Attributes:
        config: Site configuration.
        metadata_extractor: Composite metadata extractor.
        url_deriver: URL deriver instance.
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        metadata_extractor: CompositeMetadataExtractor | None = None,
        url_deriver: UrlDeriver | None = None,
    ):
        self.config = config if config is not None else dict(DEFAULT_CONFIG)
        self.metadata_extractor = metadata_extractor or CompositeMetadataExtractor(
            excerpt_separator=self.config.get("excerpt_separator", "\n\n")
        )
        self.url_deriver = url_deriver or UrlDeriver(self.config.get("permalink", "date"))

    def build(self, source: Path, key: str) -> Document:
        """Build a Document from a source file.

        Args:
            source: Path to the source file.
            key: Identifier the document is stored under.

        Returns:
            Document object.

        Raises:
            MalformedFrontMatterError: If the front matter is not well-formed.
        """
        front_matter, body = parse_front_matter(source, key)
        metadata = self.metadata_extractor.extract(front_matter, body, source)
        kind = metadata.get("kind", "page")
        slug = metadata.get("slug", "")
        categories = tuple(metadata.get("categories", ()))
        date = metadata.get("date")
        url = self.url_deriver.derive(key, front_matter, kind, slug, categories, date)

        return Document(
            path=key,
            front_matter=front_matter,
            body=body,
            source=source,
            title=metadata.get("title", ""),
            date=date,
            slug=slug,
            categories=categories,
            kind=kind,
            draft=metadata.get("draft", False),
            published=metadata.get("published", True),
            url=url,
            excerpt=metadata.get("excerpt", ""),
        )
