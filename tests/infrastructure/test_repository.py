"""Tests for the filesystem ADR repository."""

from __future__ import annotations

from pathlib import Path

import pytest

from radr.infrastructure.repository import FsAdrRepository, managed_extensions


class TestManagedExtensions:
    def test_configured_first(self) -> None:
        assert managed_extensions("txt") == ("txt", "md", "mdx")

    def test_deduplicated(self) -> None:
        assert managed_extensions(".mdx") == ("mdx", "md")


class TestList:
    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert FsAdrRepository(tmp_path / "nope").list() == []

    def test_only_managed_files(self, adr_dir: Path) -> None:
        (adr_dir / "0001-a.md").write_text("# ADR 0001: A\n")
        (adr_dir / "0002-b.mdx").write_text("# ADR 0002: B\n")
        (adr_dir / "index.md").write_text("# Index\n")
        (adr_dir / "12-short.md").write_text("x\n")
        (adr_dir / "0003-c.txt").write_text("x\n")
        (adr_dir / "0004-dir.md").mkdir()

        repo = FsAdrRepository(adr_dir, extensions=("md", "mdx"))
        assert [r.filename for r in repo.list()] == ["0001-a.md", "0002-b.mdx"]

    def test_md_only_by_default(self, adr_dir: Path) -> None:
        (adr_dir / "0001-a.md").write_text("# ADR 0001: A\n")
        (adr_dir / "0002-b.mdx").write_text("# ADR 0002: B\n")
        assert [r.number for r in FsAdrRepository(adr_dir).list()] == [1]

    def test_sorted_by_number_then_filename(self, adr_dir: Path) -> None:
        (adr_dir / "0010-j.md").write_text("# ADR 0010: J\n")
        (adr_dir / "0002-z.md").write_text("# ADR 0002: Z\n")
        (adr_dir / "0002-a.md").write_text("# ADR 0002: A\n")
        records = FsAdrRepository(adr_dir).list()
        assert [r.filename for r in records] == ["0002-a.md", "0002-z.md", "0010-j.md"]


class TestReadWrite:
    def test_write_creates_parents(self, tmp_path: Path) -> None:
        repo = FsAdrRepository(tmp_path)
        target = tmp_path / "a" / "b" / "0001-x.md"
        repo.write(target, "hello\n")
        assert repo.read(target) == "hello\n"

    def test_newlines_preserved(self, adr_dir: Path) -> None:
        repo = FsAdrRepository(adr_dir)
        target = adr_dir / "0001-x.md"
        repo.write(target, "a\r\nb\n")
        assert target.read_bytes() == b"a\r\nb\n"
        assert repo.read(target) == "a\r\nb\n"

    def test_read_missing_raises(self, adr_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FsAdrRepository(adr_dir).read(adr_dir / "0001-missing.md")

    def test_delete(self, adr_dir: Path) -> None:
        target = adr_dir / "0001-x.md"
        target.write_text("x\n")
        FsAdrRepository(adr_dir).delete(target)
        assert not target.exists()
