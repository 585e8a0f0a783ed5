"""Tests for Jinja2 template rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from radr.infrastructure.templates import (
    TemplateUnreadableError,
    render_default_body,
    render_external_template,
)


class TestDefaultBody:
    def test_sections(self) -> None:
        body = render_default_body(title="X")
        assert body.startswith("## Context\n")
        assert "## Decision\n" in body
        assert "## Consequences\n" in body
        assert body.endswith("\n")


class TestExternalTemplate:
    def test_placeholders(self, tmp_path: Path) -> None:
        template = tmp_path / "adr.md"
        template.write_text("# ADR {{NUMBER}}: {{TITLE}}\n\nDate: {{DATE}}\nStatus: {{STATUS}}\n")
        text = render_external_template(
            template, NUMBER="0001", TITLE="X", DATE="2024-01-01", STATUS="Proposed"
        )
        assert text == "# ADR 0001: X\n\nDate: 2024-01-01\nStatus: Proposed\n"

    def test_missing_template(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateUnreadableError) as excinfo:
            render_external_template(tmp_path / "missing.md")
        assert excinfo.value.path == tmp_path / "missing.md"

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateUnreadableError, match="Cannot read template"):
            render_external_template(tmp_path)

    def test_broken_placeholder(self, tmp_path: Path) -> None:
        template = tmp_path / "broken.md"
        template.write_text("# ADR {{ NUMBER + }}\n")
        with pytest.raises(TemplateUnreadableError, match="line 1"):
            render_external_template(template)

    def test_markdown_braces_are_literal(self, tmp_path: Path) -> None:
        template = tmp_path / "adr.mdx"
        source = "# ADR {{NUMBER}}\n\n## Context {#context}\n\n{% raw %} and {#- x -#}\n"
        template.write_text(source)
        assert render_external_template(template, NUMBER="0004") == source.replace(
            "{{NUMBER}}", "0004"
        )

    def test_unknown_placeholders_kept(self, tmp_path: Path) -> None:
        template = tmp_path / "adr.md"
        template.write_text("Owner: {{OWNER}}\nToken: {{ ci.token }}\nTitle: {{TITLE}}\n")
        text = render_external_template(template, TITLE="X")
        assert text == "Owner: {{OWNER}}\nToken: {{ci.token}}\nTitle: X\n"
