"""Tests for output mode selection."""

import json

from radr.output.formatters import OutputSettings, format_result
from radr.services.result import ServiceResult


def _result() -> ServiceResult:
    return ServiceResult(ok=True, op="create", data={"number": 1, "path": "docs/adr/0001-x.md"})


class TestFormatResult:
    def test_json(self) -> None:
        output = format_result(_result(), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["number"] == 1

    def test_json_beats_quiet(self) -> None:
        output = format_result(_result(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "create"

    def test_quiet(self) -> None:
        assert format_result(_result(), settings=OutputSettings(quiet=True)) == "docs/adr/0001-x.md"

    def test_human_default(self) -> None:
        output = format_result(_result())
        assert "OK" in output
        assert "number: 0001" in output
