"""Config file discovery and loading.

Lookup order: explicit ``--config`` path, the ``RADR_CONFIG`` environment
variable, then the first existing candidate file in the working directory.
TOML, YAML, and JSON are accepted, chosen by file extension.
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from radr.config.models import AdrConfig

CONFIG_ENV_VAR = "RADR_CONFIG"

CONFIG_CANDIDATES: tuple[str, ...] = (
    "radr.toml",
    "radr.yaml",
    "radr.yml",
    "radr.json",
    ".radrrc.toml",
    ".radrrc.yaml",
    ".radrrc.yml",
    ".radrrc.json",
)


class ConfigFileError(ValueError):
    """A config file could not be read or parsed."""


def _load_yaml(raw: str) -> Any:
    return YAML(typ="safe").load(raw)


_PARSERS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "toml": ("TOML", tomllib.loads),
    "json": ("JSON", json.loads),
    "yaml": ("YAML", _load_yaml),
    "yml": ("YAML", _load_yaml),
}


def find_config(explicit: Path | None = None, cwd: Path | None = None) -> Path | None:
    """Locate the config file to use, or None when there is none."""
    if explicit is not None:
        return explicit
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    base = cwd or Path.cwd()
    for name in CONFIG_CANDIDATES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Read and parse a config file into a plain dict.

    Raises:
        ConfigFileError: On an unsupported extension, a read failure, or
            content that does not parse into a mapping.
    """
    ext = path.suffix.lstrip(".").lower()
    if ext not in _PARSERS:
        msg = f"Unsupported config extension: {ext}"
        raise ConfigFileError(msg)
    label, parser = _PARSERS[ext]

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Reading config at {path}: {exc}"
        raise ConfigFileError(msg) from exc

    try:
        data = parser(raw)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, YAMLError) as exc:
        msg = f"Parsing {label} config at {path}: {exc}"
        raise ConfigFileError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Parsing {label} config at {path}: expected a mapping"
        raise ConfigFileError(msg)
    return dict(data)


def load_config(path: Path | None = None, cwd: Path | None = None) -> AdrConfig:
    """Load and validate config, falling back to defaults when none is found."""
    found = find_config(path, cwd)
    if found is None:
        return AdrConfig()
    return AdrConfig.model_validate(load_config_file(found))
