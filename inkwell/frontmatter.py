"""Front matter parsing.

A source file starts with a block delimited by ``---`` lines holding YAML
key/value pairs, followed by the free-text body::

    ---
    layout: post
    title: "Class based views"
    ---
    Body text, kept verbatim.

Values are loaded with YAML's base loader so every scalar stays the literal
string the author wrote (quotes removed, nothing coerced to dates, numbers or
booleans).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from yaml.constructor import ConstructorError

from .errors import MalformedFrontMatterError

OPENING_MARKER = "---"
CLOSING_MARKERS = ("---",)


class _FrontMatterLoader(yaml.BaseLoader):
    """Base loader that refuses duplicate mapping keys."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _value_node in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, str):
                continue
            if key in seen:
                raise ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _is_marker(line: str, markers: tuple[str, ...]) -> bool:
    return line.rstrip() in markers


def split_front_matter(
    text: str, source: str | Path | None = None
) -> tuple[dict[str, Any], str]:
    """Split a source text into its front matter mapping and body.

    Args:
        text: Raw file content.
        source: Identifier of the source, used in error messages.

    Returns:
        Tuple of (front matter dict, body). The body is everything after the
        closing marker line, unchanged.

    Raises:
        MalformedFrontMatterError: If the opening or closing marker is
            missing, the block is not valid YAML, is not a mapping, or
            repeats a key.
    """
    lines = text.splitlines(keepends=True)
    if not lines or not _is_marker(lines[0], (OPENING_MARKER,)):
        raise MalformedFrontMatterError(
            source, f"missing opening {OPENING_MARKER!r} front matter delimiter"
        )

    end = None
    for index in range(1, len(lines)):
        if _is_marker(lines[index], CLOSING_MARKERS):
            end = index
            break
    if end is None:
        raise MalformedFrontMatterError(
            source, f"missing closing {OPENING_MARKER!r} front matter delimiter"
        )

    block = "".join(lines[1:end])
    body = "".join(lines[end + 1 :])
    return _load_block(block, source), body


def _load_block(block: str, source: str | Path | None) -> dict[str, Any]:
    try:
        data = yaml.load(block, Loader=_FrontMatterLoader)
    except yaml.YAMLError as exc:
        raise MalformedFrontMatterError(
            source, f"invalid YAML front matter: {exc}", exc
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedFrontMatterError(
            source,
            f"front matter must be a mapping, got {type(data).__name__}",
        )
    return data


def parse_front_matter(path: Path, key: str | None = None) -> tuple[dict[str, Any], str]:
    """Read a file and split it into front matter and body.

    Args:
        path: File to read.
        key: Identifier used in error messages (defaults to the path).

    Raises:
        MalformedFrontMatterError: If the file is not valid UTF-8 or its
            front matter is malformed.
    """
    source = key if key is not None else path
    try:
        with open(path, encoding="utf-8-sig", newline="") as f:
            text = f.read()
    except UnicodeDecodeError as exc:
        raise MalformedFrontMatterError(source, "not valid UTF-8", exc) from exc
    return split_front_matter(text, source=source)
