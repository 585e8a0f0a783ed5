"""Tests for config discovery and loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from radr.config.discovery import (
    CONFIG_ENV_VAR,
    ConfigFileError,
    find_config,
    load_config,
    load_config_file,
)
from radr.config.models import AdrConfig
from radr.domain.records import Representation


class TestFindConfig:
    def test_explicit_path_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "radr.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))
        explicit = tmp_path / "explicit.toml"
        assert find_config(explicit, tmp_path) == explicit

    def test_env_var_beats_candidates(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "radr.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))
        assert find_config(None, tmp_path) == tmp_path / "env.toml"

    def test_candidate_order(self, tmp_path: Path) -> None:
        (tmp_path / ".radrrc.json").write_text("{}")
        (tmp_path / "radr.yaml").write_text("")
        assert find_config(None, tmp_path) == tmp_path / "radr.yaml"

    def test_dotfile_candidate(self, tmp_path: Path) -> None:
        (tmp_path / ".radrrc.yml").write_text("")
        assert find_config(None, tmp_path) == tmp_path / ".radrrc.yml"

    def test_none_found(self, tmp_path: Path) -> None:
        assert find_config(None, tmp_path) is None


class TestLoadConfigFile:
    def test_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "radr.toml"
        path.write_text('adr_dir = "decisions"\nfront_matter = true\n')
        assert load_config_file(path) == {"adr_dir": "decisions", "front_matter": True}

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "radr.yaml"
        path.write_text("adr_dir: decisions\nformat: mdx\n")
        assert load_config_file(path) == {"adr_dir": "decisions", "format": "mdx"}

    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "radr.json"
        path.write_text('{"index_name": "README.md"}')
        assert load_config_file(path) == {"index_name": "README.md"}

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "radr.yml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "radr.ini"
        path.write_text("")
        with pytest.raises(ConfigFileError, match="Unsupported config extension: ini"):
            load_config_file(path)

    def test_parse_error_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "radr.toml"
        path.write_text("adr_dir = \n")
        with pytest.raises(ConfigFileError, match="Parsing TOML config at"):
            load_config_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="Reading config at"):
            load_config_file(tmp_path / "radr.json")

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "radr.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigFileError, match="expected a mapping"):
            load_config_file(path)


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        cfg = load_config(None, tmp_path)
        assert cfg == AdrConfig()
        assert cfg.adr_dir == Path("docs/adr")
        assert cfg.index_path == Path("docs/adr/index.md")
        assert cfg.extension == "md"
        assert cfg.representation is Representation.PLAIN

    def test_sparse_override(self, tmp_path: Path) -> None:
        (tmp_path / "radr.toml").write_text('format = ".mdx"\nfront_matter = true\n')
        cfg = load_config(None, tmp_path)
        assert cfg.extension == "mdx"
        assert cfg.representation is Representation.FRONT_MATTER
        assert cfg.index_name == "index.md"
