"""Utility functions for inkwell.

String and path helpers shared by discovery, metadata extraction and URL
derivation.

Key functions:
    slugify: Convert filenames to URL slugs.
    titleize: Convert filenames to human-readable titles.
    extract_date_from_name: Extract date from a YYYY-MM-DD filename prefix.
    parse_date: Parse a front matter date string.
    split_categories: Normalize a categories value into a tuple.
    build_categories_index: Build index of documents by category.
    is_markdown: Check if a path has one of the Markdown extensions.
    is_source: Check if a path is a candidate content source.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path, PurePath
from typing import Any

DEFAULT_MARKDOWN_EXT = ("markdown", "mkdown", "mkdn", "mkd", "md")

# Accepted front matter date layouts, most specific first.
DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


def _strip_date_prefix(stem: str) -> str:
    parts = stem.split("-")
    if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
        return "-".join(parts[3:])
    return stem


def slugify(name: str) -> str:
    """Convert filename (without extension) to slug, dropping date prefix.

    Args:
        name: Filename stem.

    Returns:
        URL-friendly slug.

    Examples:
        >>> slugify("2015-05-01-Django Tips")
        'django-tips'
    """
    cleaned = _strip_date_prefix(name)
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Removes date prefixes (YYYY-MM-DD), replaces hyphens and underscores
    with spaces, and capitalizes each word.

    Args:
        filename: Filename with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("2015-05-01-class-based-views.md")
        'Class Based Views'
    """
    base = _strip_date_prefix(Path(filename).stem)
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def extract_date_from_name(name: str) -> datetime | None:
    """Extract a date from a filename with YYYY-MM-DD prefix.

    Args:
        name: Filename stem (without extension).

    Returns:
        datetime object if a valid date prefix is found, None otherwise.
    """
    parts = name.split("-")
    if len(parts) >= 3 and all(p.isdigit() for p in parts[:3]):
        try:
            return datetime(int(parts[0]), int(parts[1]), int(parts[2]))
        except ValueError:
            return None
    return None


def parse_date(value: str) -> datetime | None:
    """Parse a front matter date.

    A UTC offset, when present, is dropped after parsing so the wall-clock
    time the author wrote is kept and all dates compare with each other.

    Args:
        value: Date string as written in the front matter.

    Returns:
        Naive datetime, or None if the value matches no known layout.
    """
    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=None)
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        return None


def split_categories(value: Any) -> tuple[str, ...]:
    """Normalize a categories value.

    Jekyll accepts either a space separated string or a list.

    Examples:
        >>> split_categories("django python")
        ('django', 'python')
        >>> split_categories(["django", "web dev"])
        ('django', 'web dev')
    """
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split()
    else:
        items = [str(item).strip() for item in value]
    seen: list[str] = []
    for item in items:
        if item and item not in seen:
            seen.append(item)
    return tuple(seen)


def build_categories_index(documents: Iterable) -> dict[str, list]:
    """Build an index mapping categories to the documents filed under them.

    Args:
        documents: Iterable of objects with a 'categories' attribute.

    Returns:
        Dictionary mapping category names to lists of documents.
    """
    categories: dict[str, list] = {}
    for doc in documents:
        for category in doc.categories:
            categories.setdefault(category, []).append(doc)
    return categories


def is_internal_name(name: str) -> bool:
    """Check if a file or directory name is hidden from discovery."""
    return name.startswith(("_", "."))


def is_markdown(path: PurePath, extensions: Iterable[str] = DEFAULT_MARKDOWN_EXT) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.
        extensions: Markdown extensions without the leading dot.

    Returns:
        True if the suffix is one of the extensions (case-insensitive).
    """
    return path.suffix.lower().lstrip(".") in {ext.lower() for ext in extensions}


def is_html(path: PurePath) -> bool:
    """Check if a path is an HTML file."""
    return path.suffix.lower() in (".html", ".htm")


def is_source(path: PurePath, extensions: Iterable[str] = DEFAULT_MARKDOWN_EXT) -> bool:
    """Check if a path is a candidate content source (Markdown or HTML)."""
    return is_markdown(path, extensions) or is_html(path)


def parse_extensions(value: Any) -> tuple[str, ...]:
    """Parse the ``markdown_ext`` setting (comma separated string or list)."""
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value or ())
    return tuple(str(item).strip().lstrip(".") for item in items if str(item).strip())
