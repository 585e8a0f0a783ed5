"""Unified settings — CLI flags, env vars, and the config file in one object.

Priority chain (highest to lowest):
  1. Init kwargs   — CLI flags passed by Click
  2. Env vars      — ``RADR_*`` prefix
  3. Config file   — discovered by :func:`radr.config.discovery.find_config`
  4. Code defaults — baked into :class:`radr.config.models.AdrConfig`
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from radr.config.discovery import ConfigFileError, find_config, load_config_file
from radr.config.models import AdrConfig


class ConfigFileSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a TOML/YAML/JSON config file."""

    def __init__(self, settings_cls: type[BaseSettings], config_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if config_path is not None:
            try:
                self._data = load_config_file(config_path)
            except ConfigFileError as exc:
                import click

                raise click.ClickException(str(exc)) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the config path during construction.
_tls = threading.local()


class RadrSettings(BaseSettings):
    """Settings for the whole ``radr`` CLI, stored in ``click.Context.obj``."""

    model_config = {
        "frozen": True,
        "env_prefix": "RADR_",
        "extra": "ignore",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Config file keys ---
    adr_dir: Path = Path("docs/adr")
    index_name: str = "index.md"
    template: Path | None = None
    format: str = "md"
    front_matter: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the config file source between env vars and defaults."""
        config_path = getattr(_tls, "config_path", None)
        return (
            init_settings,
            env_settings,
            ConfigFileSettingsSource(settings_cls, config_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> RadrSettings:
        """Construct settings from a CLI invocation.

        Discovers the config file (or uses *config_path*) and merges the
        CLI flags as highest-priority overrides.
        """
        found = find_config(Path(config_path) if config_path else None, cwd)
        _tls.config_path = found
        try:
            return cls(config_path=found, **cli_flags)
        finally:
            _tls.config_path = None

    def adr_config(self) -> AdrConfig:
        """The subset of settings the service layer consumes."""
        return AdrConfig(
            adr_dir=self.adr_dir,
            index_name=self.index_name,
            template=self.template,
            format=self.format,
            front_matter=self.front_matter,
        )
