"""Document codec — parse, render, and targeted metadata updates.

Two on-disk representations share one canonical :class:`AdrRecord`:

- *plain*: a ``# ADR 0001: Title`` heading followed by metadata lines
  (``Date:``, ``Status:``, ``Superseded-by:``, ``Supersedes:``).
- *front-matter*: a ``---`` fenced YAML block holding the same fields,
  followed by the heading and body.

Everything that is not a managed field is the record's ``body_tail`` and
is preserved verbatim by every operation except an explicit reformat.

Targeted updates (:func:`update_fields`) never go through a full
parse/render round-trip for plain documents: lines are overwritten in
place and missing fields are inserted next to their neighbours, with
``Superseded-by`` always kept directly after ``Status``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date
from io import StringIO
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from radr.domain.lifecycle import DEFAULT_STATUS
from radr.domain.records import AdrRecord, Representation
from radr.domain.slugs import (
    extract_number,
    format_number,
    markdown_link,
    number_from_filename,
    title_from_filename,
)

logger = logging.getLogger(__name__)

# Only this many leading lines are inspected for metadata.
SCAN_LIMIT = 200

HEADING_PATTERN = re.compile(r"^#\s*ADR[\s-]*(\d+)\s*:\s*(.*?)\s*$")

# Managed plain-format fields, in header order.
FIELD_PREFIXES: dict[str, str] = {
    "title": "Title:",
    "date": "Date:",
    "status": "Status:",
    "superseded_by": "Superseded-by:",
    "supersedes": "Supersedes:",
}
FIELD_ORDER: tuple[str, ...] = tuple(FIELD_PREFIXES)

# Managed front-matter keys, in canonical order.
FRONTMATTER_KEY_ORDER: list[str] = [
    "number",
    "title",
    "date",
    "status",
    "superseded_by",
    "supersedes",
]

_FRONTMATTER_DELIMITER = "---"
_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:[\\/]")
_YAML_INDICATORS = frozenset("[]{}&*!|>%@`#,")
_YAML_ENTRY_INDICATORS = frozenset("-?:")
_YAML_RESERVED = frozenset({"true", "false", "null", "~", "yes", "no", "on", "off"})
_SUPERSEDES_LINK = re.compile(r"^(Supersedes:\s*\[)(\d+)(\]\()([^)]*)(\).*)$")
_FRONTMATTER_SUPERSEDES_LINK = re.compile(r"^(supersedes:\s*[\"']?\[)(\d+)(\]\()([^)]*)(\).*)$")


# ---------------------------------------------------------------------------
# YAML front matter
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful, so each load/dump gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


def escape_yaml(value: str) -> str:
    """Quote a front-matter string value when YAML would misread it.

    A value is double-quoted if it contains a colon (a drive-letter prefix
    such as ``C:\\`` does not count), a double or single quote, starts with
    a digit or a YAML indicator character, opens like a block entry
    (``- item``, ``? key``), is a reserved scalar, or carries surrounding
    whitespace. Embedded backslashes and double quotes are
    backslash-escaped.
    """
    colon_scan = value[2:] if _DRIVE_PREFIX.match(value) else value
    needs_quotes = (
        not value
        or ":" in colon_scan
        or '"' in value
        or "'" in value
        or " #" in value
        or value[0].isdigit()
        or value[0] in _YAML_INDICATORS
        or (value[0] in _YAML_ENTRY_INDICATORS and value[1:2] in ("", " ", "\t"))
        or value.lower() in _YAML_RESERVED
        or value != value.strip()
    )
    if not needs_quotes:
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split a fenced YAML block from the rest of the document.

    Returns ``(block, body)`` where both parts are byte-exact slices of
    *content*. ``block`` is None when the document does not open with a
    ``---`` line or the block is never closed.
    """
    lines = content.splitlines(keepends=True)
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None, content
    for idx in range(1, len(lines)):
        if lines[idx].strip() == _FRONTMATTER_DELIMITER:
            return "".join(lines[1:idx]), "".join(lines[idx + 1 :])
    return None, content


def decode_frontmatter(block: str) -> dict[str, Any]:
    """Decode a YAML block into a field dict.

    A block that fails to decode degrades to an empty field set so that
    one broken document never blocks operations on the others.
    """
    try:
        data = _new_yaml().load(block)
    except YAMLError as exc:
        logger.warning("Malformed front matter, using defaults: %s", exc)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Front matter is not a mapping, using defaults")
        return {}
    return dict(data)


def order_frontmatter(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Return *fields* with managed keys first, the rest alphabetically.

    ``None`` values are omitted.
    """
    ordered: dict[str, Any] = {}
    for key in FRONTMATTER_KEY_ORDER:
        if fields.get(key) is not None:
            ordered[key] = fields[key]
    for key in sorted(fields, key=str):
        if key not in ordered and fields[key] is not None:
            ordered[key] = fields[key]
    return ordered


def encode_frontmatter(fields: Mapping[str, Any]) -> str:
    """Encode *fields* as YAML block text (without delimiters)."""
    parts: list[str] = []
    for key, value in order_frontmatter(fields).items():
        if isinstance(value, str):
            parts.append(f"{key}: {escape_yaml(value)}\n")
        elif isinstance(value, int) and not isinstance(value, bool):
            parts.append(f"{key}: {value}\n")
        else:
            buf = StringIO()
            _new_yaml().dump({key: value}, buf)
            parts.append(buf.getvalue())
    return "".join(parts)


def render_frontmatter(fields: Mapping[str, Any], body: str) -> str:
    """Render a fenced YAML block followed by *body* verbatim."""
    return f"{_FRONTMATTER_DELIMITER}\n{encode_frontmatter(fields)}{_FRONTMATTER_DELIMITER}\n{body}"


# ---------------------------------------------------------------------------
# Plain metadata lines
# ---------------------------------------------------------------------------


def match_field(line: str) -> str | None:
    """Return the managed field a metadata line sets, if any."""
    for key, prefix in FIELD_PREFIXES.items():
        if line.startswith(prefix):
            return key
    return None


def parse_heading(line: str) -> tuple[int | None, str | None]:
    """Parse ``# ADR <number>: <title>`` into ``(number, title)``."""
    match = HEADING_PATTERN.match(line)
    if match is None:
        return None, None
    return int(match.group(1)), match.group(2) or None


def render_heading(number: int, title: str) -> str:
    return f"# ADR {format_number(number)}: {title}"


def split_header(text: str) -> tuple[list[str], str]:
    """Separate the heading and metadata block from the body tail.

    Skips the heading line if present, then one blank line, then the
    contiguous run of managed metadata lines and, only when that run is
    non-empty, one blank separator. Everything after that is returned
    verbatim as the tail.
    """
    lines = text.split("\n")
    idx = 0
    if idx < len(lines) and HEADING_PATTERN.match(lines[idx]):
        idx += 1
    if idx < len(lines) and not lines[idx].strip():
        idx += 1
    metadata_start = idx
    while idx < len(lines) and match_field(lines[idx]) is not None:
        idx += 1
    if idx > metadata_start and idx < len(lines) and not lines[idx].strip():
        idx += 1
    return lines[:idx], "\n".join(lines[idx:])


def _scan_fields(lines: list[str]) -> dict[str, str]:
    """Collect the first non-empty value of each managed field."""
    values: dict[str, str] = {}
    for line in lines[:SCAN_LIMIT]:
        key = match_field(line)
        if key is None or key in values:
            continue
        value = line[len(FIELD_PREFIXES[key]) :].strip()
        if value:
            values[key] = value
    return values


def _text(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def _strip_separator(body: str) -> str:
    """Drop one blank line directly after a front-matter block."""
    if body.startswith("\r\n"):
        return body[2:]
    if body.startswith("\n"):
        return body[1:]
    return body


# ---------------------------------------------------------------------------
# Parse / render
# ---------------------------------------------------------------------------


def detect_representation(raw: str) -> Representation:
    block, _ = split_frontmatter(raw)
    return Representation.PLAIN if block is None else Representation.FRONT_MATTER


def extract_body_tail(raw: str) -> str:
    """Return the body tail of a document in either representation."""
    block, body = split_frontmatter(raw)
    if block is not None:
        body = _strip_separator(body)
    return split_header(body)[1]


def parse_document(raw: str, path: Path, *, today: str | None = None) -> AdrRecord:
    """Parse raw document text into an :class:`AdrRecord`.

    Front-matter keys win over metadata lines, which win over the heading.
    Missing values fall back to the filename (number, de-slugified title),
    ``Accepted`` for the status, and *today* for the date.
    """
    block, body = split_frontmatter(raw)
    values: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    representation = Representation.PLAIN
    if block is not None:
        representation = Representation.FRONT_MATTER
        body = _strip_separator(body)
        for key, value in decode_frontmatter(block).items():
            if key in FRONTMATTER_KEY_ORDER:
                if value is not None and _text(value):
                    values[key] = value
            else:
                extra[str(key)] = value

    lines = body.split("\n")[:SCAN_LIMIT]
    heading_number, heading_title = parse_heading(lines[0]) if lines else (None, None)
    for key, value in _scan_fields(lines).items():
        values.setdefault(key, value)

    number = extract_number(values.get("number"))
    if number is None:
        number = heading_number
    if number is None:
        number = number_from_filename(path)

    title = _text(values["title"]) if "title" in values else heading_title
    if not title:
        title = title_from_filename(path) or "Untitled"

    status = _text(values["status"]) if "status" in values else str(DEFAULT_STATUS)
    record_date = _text(values["date"]) if "date" in values else today or date.today().isoformat()

    return AdrRecord(
        number=number or 0,
        title=title,
        status=status,
        date=record_date,
        supersedes=extract_number(values.get("supersedes")),
        superseded_by=extract_number(values.get("superseded_by")),
        representation=representation,
        path=path,
        body_tail=split_header(body)[1],
        extra=extra,
    )


def render_document(
    record: AdrRecord,
    representation: Representation,
    filenames: Mapping[int, str],
) -> str:
    """Render *record* in *representation* around its untouched body tail.

    ``Supersedes`` becomes a clickable link when *filenames* still knows
    the target, otherwise the bare zero-padded number. In front matter the
    link is a quoted string. Unmanaged front-matter keys have no plain
    counterpart and are dropped, with a warning, when rendering plain.
    """
    heading = render_heading(record.number, record.title)
    tail = f"\n{record.body_tail}" if record.body_tail else ""
    supersedes = (
        markdown_link(record.supersedes, dict(filenames)) if record.supersedes is not None else None
    )

    if representation is Representation.FRONT_MATTER:
        fields: dict[str, Any] = {
            **record.extra,
            "number": record.number,
            "title": record.title,
            "date": record.date,
            "status": record.status,
            "superseded_by": record.superseded_by,
            "supersedes": supersedes,
        }
        return render_frontmatter(fields, f"{heading}\n{tail}")

    if record.extra:
        logger.warning(
            "ADR %s: dropping front-matter keys with no plain form: %s",
            record.display_number,
            ", ".join(sorted(map(str, record.extra))),
        )
    header = [heading, "", f"Date: {record.date}", f"Status: {record.status}"]
    if record.superseded_by is not None:
        header.append(f"Superseded-by: {format_number(record.superseded_by)}")
    if supersedes is not None:
        header.append(f"Supersedes: {supersedes}")
    return "\n".join(header) + "\n" + tail


# ---------------------------------------------------------------------------
# Targeted updates
# ---------------------------------------------------------------------------


def update_fields(raw: str, updates: Mapping[str, str | int]) -> str:
    """Apply field updates to existing document text.

    Front-matter documents have their block decoded, mutated, and
    re-encoded; the body after the block is untouched. Plain documents are
    edited line by line (see :func:`_update_plain`). Re-applying the same
    updates is a no-op.
    """
    unknown = set(updates) - set(FIELD_PREFIXES)
    if unknown:
        msg = f"Unmanaged fields: {sorted(unknown)}"
        raise ValueError(msg)

    block, body = split_frontmatter(raw)
    if block is not None:
        fields = decode_frontmatter(block)
        fields.update(updates)
        return render_frontmatter(fields, body)
    return _update_plain(raw, updates)


def _find_field(lines: list[str], key: str) -> int | None:
    prefix = FIELD_PREFIXES[key]
    for idx, line in enumerate(lines[:SCAN_LIMIT]):
        if line.startswith(prefix):
            return idx
    return None


def _insertion_index(lines: list[str], key: str) -> int:
    """Where a missing *key* line goes.

    Directly after the nearest preceding managed field that exists, else
    directly before the nearest following one, else right after the
    heading (line index 1).
    """
    position = FIELD_ORDER.index(key)
    for before in reversed(FIELD_ORDER[:position]):
        idx = _find_field(lines, before)
        if idx is not None:
            return idx + 1
    for after in FIELD_ORDER[position + 1 :]:
        idx = _find_field(lines, after)
        if idx is not None:
            return idx
    return min(1, len(lines))


def _plain_value(value: str | int) -> str:
    if isinstance(value, int):
        return format_number(value)
    return value


def _update_plain(raw: str, updates: Mapping[str, str | int]) -> str:
    lines = raw.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    for key in FIELD_ORDER:
        if key not in updates:
            continue
        prefix = FIELD_PREFIXES[key]
        new_line = f"{prefix} {_plain_value(updates[key])}"
        hits = [i for i, line in enumerate(lines[:SCAN_LIMIT]) if line.startswith(prefix)]
        if hits:
            for i in hits:
                lines[i] = new_line
        else:
            lines.insert(_insertion_index(lines, key), new_line)

    _keep_superseded_by_adjacent(lines)
    return "\n".join(lines) + "\n"


def _keep_superseded_by_adjacent(lines: list[str]) -> None:
    """Move the ``Superseded-by`` line directly after ``Status``."""
    status_idx = _find_field(lines, "status")
    link_idx = _find_field(lines, "superseded_by")
    if status_idx is None or link_idx is None or link_idx == status_idx + 1:
        return
    link_line = lines.pop(link_idx)
    status_idx = _find_field(lines, "status")
    assert status_idx is not None
    lines.insert(status_idx + 1, link_line)


def _frontmatter_end(lines: list[str]) -> int:
    """Index of the closing ``---`` line, or 0 without a front-matter block."""
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return 0
    for idx in range(1, len(lines)):
        if lines[idx].strip() == _FRONTMATTER_DELIMITER:
            return idx
    return 0


def relink_supersedes(raw: str, number: int, filename: str) -> str:
    """Point every ``Supersedes: [<number>](...)`` link at *filename*.

    Inside a front-matter block the ``supersedes: "[<number>](...)"`` key
    is patched instead. Only lines of those exact shapes are touched; the
    rest of *raw* is returned byte-for-byte.
    """
    lines = raw.split("\n")
    block_end = _frontmatter_end(lines)
    for idx, line in enumerate(lines):
        pattern = _FRONTMATTER_SUPERSEDES_LINK if 0 < idx < block_end else _SUPERSEDES_LINK
        match = pattern.match(line)
        if match is None or int(match.group(2)) != number:
            continue
        lines[idx] = f"{match.group(1)}{match.group(2)}{match.group(3)}{filename}{match.group(5)}"
    return "\n".join(lines)
