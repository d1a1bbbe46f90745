"""Site configuration loading.

Settings live in ``_config.yml`` (or ``_config.yaml``) at the site root and
are merged over DEFAULT_CONFIG. Only the keys inkwell understands are used;
everything else is kept so callers can read it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILES = ("_config.yml", "_config.yaml")

DEFAULT_CONFIG: dict[str, Any] = {
    "permalink": "date",
    "excerpt_separator": "\n\n",
    "markdown_ext": "markdown,mkdown,mkdn,mkd,md",
    "include": [],
    "exclude": [
        "Gemfile",
        "Gemfile.lock",
        "node_modules",
        "vendor",
        "README.md",
        "LICENSE*",
        "CHANGELOG*",
    ],
}


def load_config(site_dir: Path) -> dict[str, Any]:
    """Load site configuration from ``_config.yml``.

    Args:
        site_dir: Root directory of the site sources.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    config = {key: _copy(value) for key, value in DEFAULT_CONFIG.items()}
    for name in CONFIG_FILES:
        config_path = site_dir / name
        if not config_path.exists():
            continue
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid {name}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"Invalid {name}: expected a mapping")
        logger.debug("Loaded configuration from %s", config_path)
        config.update(loaded)
        break
    return config


def _copy(value: Any) -> Any:
    return list(value) if isinstance(value, list) else value
