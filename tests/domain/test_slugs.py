"""Tests for the slug and number codec."""

from __future__ import annotations

from pathlib import Path

import pytest

from radr.domain.slugs import (
    build_filename,
    extract_number,
    format_number,
    markdown_link,
    number_from_filename,
    parse_number,
    slugify,
    title_from_filename,
)


class TestSlugify:
    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("First Decision", "first-decision"),
            ("Use PostgreSQL (v15)!", "use-postgresql-v15"),
            ("  a__b--c  ", "a-b-c"),
            ("a - b", "a-b"),
            ("Café au lait", "caf-au-lait"),
        ],
    )
    def test_slug_rules(self, title: str, expected: str) -> None:
        assert slugify(title) == expected

    def test_empty_result_falls_back(self) -> None:
        assert slugify("!!!") == "adr"
        assert slugify("") == "adr"


class TestNumbers:
    def test_format_pads_to_four(self) -> None:
        assert format_number(3) == "0003"
        assert format_number(0) == "0000"

    def test_format_wider_numbers_unchanged(self) -> None:
        assert format_number(12345) == "12345"

    @pytest.mark.parametrize(("raw", "expected"), [("0003", 3), ("3", 3), ("0000", 0), (" 7 ", 7)])
    def test_parse_accepts_padding(self, raw: str, expected: int) -> None:
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "3a", "-1", "1.5"])
    def test_parse_rejects_non_numbers(self, raw: str) -> None:
        with pytest.raises(ValueError, match="Not a valid ADR number"):
            parse_number(raw)


class TestExtractNumber:
    def test_int(self) -> None:
        assert extract_number(2) == 2

    def test_bool_is_not_a_number(self) -> None:
        assert extract_number(True) is None

    def test_padded_string(self) -> None:
        assert extract_number("0002") == 2

    def test_markdown_link(self) -> None:
        assert extract_number("[0002](0002-choose-y.md)") == 2

    def test_no_number(self) -> None:
        assert extract_number("Superseded") is None
        assert extract_number(None) is None


class TestFilenames:
    def test_build(self) -> None:
        assert build_filename(1, "First Decision", "md") == "0001-first-decision.md"

    def test_build_strips_leading_dot(self) -> None:
        assert build_filename(12, "Next", ".mdx") == "0012-next.mdx"

    def test_number_from_filename(self) -> None:
        assert number_from_filename(Path("0012-x.md")) == 12
        assert number_from_filename(Path("12-x.md")) is None

    def test_title_from_filename(self) -> None:
        assert title_from_filename(Path("0001-my-title.md")) == "My Title"

    def test_title_from_filename_without_slug(self) -> None:
        assert title_from_filename(Path("0001.md")) is None
        assert title_from_filename(Path("0001-.md")) is None


class TestMarkdownLink:
    def test_known_target(self) -> None:
        assert markdown_link(1, {1: "0001-a.md"}) == "[0001](0001-a.md)"

    def test_unknown_target_is_bare_number(self) -> None:
        assert markdown_link(9, {1: "0001-a.md"}) == "0009"
