"""The canonical in-memory ADR record.

One :class:`AdrRecord` exists per document file. It is produced by
:func:`radr.domain.content.parse_document` and is immutable; mutations
go through the services, which rewrite the file and re-parse.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from radr.domain.slugs import format_number, parse_number


class Representation(StrEnum):
    """On-disk encoding of a document's metadata."""

    PLAIN = "plain"
    FRONT_MATTER = "front-matter"


class AdrRecord(BaseModel):
    """Metadata fields of one ADR plus its opaque body tail.

    Attributes:
        number: Unique identifier, ``max(existing) + 1`` at creation.
        title: Display title (original casing and punctuation).
        status: Display status text (see :mod:`radr.domain.lifecycle`).
        date: ISO-8601 calendar date (``YYYY-MM-DD``).
        supersedes: Number of the record this one replaces.
        superseded_by: Number of the record that replaces this one.
        representation: Metadata encoding of the file.
        path: Storage path, owned by the repository.
        body_tail: Everything after the heading and metadata block.
        extra: Unmanaged front-matter keys, kept across re-renders.
    """

    model_config = {"frozen": True}

    number: int
    title: str
    status: str
    date: str
    supersedes: int | None = None
    superseded_by: int | None = None
    representation: Representation = Representation.PLAIN
    path: Path
    body_tail: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".")

    @property
    def display_number(self) -> str:
        return format_number(self.number)

    def to_summary(self) -> dict[str, Any]:
        """Serialize the managed fields for a ServiceResult payload."""
        data: dict[str, Any] = {
            "number": self.number,
            "title": self.title,
            "status": self.status,
            "date": self.date,
            "path": str(self.path),
            "format": str(self.representation),
        }
        if self.supersedes is not None:
            data["supersedes"] = self.supersedes
        if self.superseded_by is not None:
            data["superseded_by"] = self.superseded_by
        return data


def filename_map(records: list[AdrRecord]) -> dict[int, str]:
    """Map record numbers to their current filenames.

    With duplicate numbers the first record in *records* wins, so callers
    pass lists already sorted by :func:`sort_records`.
    """
    mapping: dict[int, str] = {}
    for record in records:
        mapping.setdefault(record.number, record.filename)
    return mapping


def sort_records(records: list[AdrRecord]) -> list[AdrRecord]:
    """Order records by number, ties broken by filename."""
    return sorted(records, key=lambda r: (r.number, r.filename))


def find_by_number(records: list[AdrRecord], number: int) -> AdrRecord | None:
    """First record carrying *number* (lowest filename on duplicates)."""
    for record in sort_records(records):
        if record.number == number:
            return record
    return None


def resolve_record(records: list[AdrRecord], id_or_title: str) -> AdrRecord | None:
    """Resolve a record by number or by case-insensitive exact title.

    A numeric argument (``3`` or ``0003``) is looked up as a number first;
    only if no record has that number is it compared against titles.
    """
    try:
        number: int | None = parse_number(id_or_title)
    except ValueError:
        number = None
    if number is not None:
        match = find_by_number(records, number)
        if match is not None:
            return match
    wanted = id_or_title.strip().lower()
    for record in sort_records(records):
        if record.title.strip().lower() == wanted:
            return record
    return None
