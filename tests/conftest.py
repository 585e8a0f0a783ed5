"""Shared pytest fixtures for radr tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from radr.config.models import AdrConfig
from radr.infrastructure.repository import FsAdrRepository, managed_extensions


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's RADR_* environment out of the tests."""
    for name in (
        "RADR_CONFIG",
        "RADR_ADR_DIR",
        "RADR_INDEX_NAME",
        "RADR_TEMPLATE",
        "RADR_FORMAT",
        "RADR_FRONT_MATTER",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def adr_dir(tmp_path: Path) -> Path:
    """Temporary ADR directory (``docs/adr`` under tmp_path)."""
    path = tmp_path / "docs" / "adr"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def make_config(adr_dir: Path) -> Callable[..., AdrConfig]:
    """Factory for an AdrConfig rooted at the temporary ADR directory."""

    def _make(**overrides: object) -> AdrConfig:
        return AdrConfig.model_validate({"adr_dir": adr_dir, **overrides})

    return _make


@pytest.fixture
def config(make_config: Callable[..., AdrConfig]) -> AdrConfig:
    return make_config()


@pytest.fixture
def repo(config: AdrConfig) -> FsAdrRepository:
    return FsAdrRepository(config.adr_dir, extensions=managed_extensions(config.extension))


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to tmp_path so the CLI works on an isolated ``docs/adr``.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` invocations enable telemetry; switch it off again after each test."""
    yield
    from radr.services.telemetry import disable_telemetry

    disable_telemetry()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """CLI invocations reconfigure logging; restore the root logger afterwards."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    radr = logging.getLogger("radr")
    radr_level = radr.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    radr.setLevel(radr_level)
