"""Tests for operation-specific Rich renderers."""

from radr.output.renderers import render_quiet, render_result
from radr.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


def _item(number: int, title: str, status: str = "Proposed") -> dict[str, object]:
    return {
        "number": number,
        "title": title,
        "status": status,
        "date": "2024-01-01",
        "path": f"docs/adr/{number:04d}-x.md",
        "format": "plain",
    }


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("accept", "NOT_FOUND", "ADR not found by id or title: x"))
        assert "ERROR" in output
        assert "accept" in output
        assert "ADR not found by id or title: x" in output

    def test_verbose_shows_detail(self) -> None:
        output = render_result(_err("accept", "NOT_FOUND", "Bad", query="x"), verbose=True)
        assert "detail" in output
        assert "query" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Record rendering ─────────────────────────────────────────────────


class TestRecordRenderer:
    def test_fields(self) -> None:
        output = render_result(_ok("create", **_item(3, "Use Rust"), supersedes=1))
        assert "OK" in output
        assert "create" in output
        assert "number: 0003" in output
        assert "title: Use Rust" in output
        assert "supersedes: 0001" in output
        assert "path: docs/adr/0003-x.md" in output

    def test_reformat_extras(self) -> None:
        output = render_result(
            _ok("reformat", **_item(1, "X"), previous_path="docs/adr/0001-old.md", relinked=[])
        )
        assert "previous_path: docs/adr/0001-old.md" in output
        assert "relinked: []" in output

    def test_verbose_meta(self) -> None:
        result = ServiceResult(
            ok=True,
            op="accept",
            data=_item(1, "X", "Accepted"),
            meta={"telemetry": {"name": "UpdateService.transition", "duration_ms": 1.5}},
        )
        output = render_result(result, verbose=True)
        assert "meta" in output
        assert "UpdateService.transition" in output


class TestTableRenderer:
    def test_list(self) -> None:
        result = _ok(
            "list",
            items=[_item(1, "One", "Accepted"), _item(2, "Two")],
            count=2,
            index_path="docs/adr/index.md",
        )
        output = render_result(result)
        assert "Number" in output
        assert "0001" in output
        assert "Two" in output
        assert "2 ADRs" in output
        assert "Updated docs/adr/index.md" in output

    def test_reformat_all(self) -> None:
        output = render_result(_ok("reformat_all", items=[_item(1, "One")], count=1, relinked=[]))
        assert "1 ADRs" in output


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("index", index_path="docs/adr/index.md", count=2))
        assert "index_path: docs/adr/index.md" in output
        assert "count: 2" in output


# ── Quiet rendering ──────────────────────────────────────────────────


class TestQuiet:
    def test_path(self) -> None:
        assert render_quiet(_ok("create", **_item(1, "X"))) == "docs/adr/0001-x.md"

    def test_items(self) -> None:
        assert render_quiet(_ok("list", items=[_item(1, "A"), _item(12, "B")])) == "0001\n0012"

    def test_fallback(self) -> None:
        assert render_quiet(_ok("index", count=1)) == "OK: index"

    def test_error(self) -> None:
        assert render_quiet(_err("reject", "NOT_FOUND", "nope")) == "ERROR: reject — nope"
