"""Slug and number codec.

Filenames follow ``{number:04}-{slug}.{ext}``. The number prefix is the
join key used to resolve cross-references between documents, so the
helpers here are the only place that format or parse it.
"""

from __future__ import annotations

import re
from pathlib import Path

NUMBER_WIDTH = 4

_NUMBER_PREFIX = re.compile(r"^(\d{4})-")
_LEADING_NUMBER = re.compile(r"^\s*\[?\s*(\d+)")
_DIGITS = re.compile(r"[0-9]+")


def slugify(title: str) -> str:
    """Convert a free-text title into a filesystem-safe slug.

    ASCII letters and digits are kept (lowercased). Whitespace, ``-`` and
    ``_`` collapse into a single ``-``; all other characters are dropped.
    An empty result becomes ``adr``.
    """
    out: list[str] = []
    last_dash = False
    for ch in title:
        c = ch.lower()
        if c.isascii() and c.isalnum():
            out.append(c)
            last_dash = False
        elif (c.isspace() or c in "-_") and not last_dash:
            out.append("-")
            last_dash = True
    slug = "".join(out).strip("-")
    return slug or "adr"


def format_number(number: int) -> str:
    """Zero-pad *number* to the display width (``3`` -> ``0003``)."""
    return f"{number:0{NUMBER_WIDTH}d}"


def parse_number(value: str) -> int:
    """Parse a possibly zero-padded decimal identifier.

    Raises:
        ValueError: If *value* is not a decimal number.
    """
    text = value.strip()
    if not _DIGITS.fullmatch(text):
        msg = f"Not a valid ADR number: {value!r}"
        raise ValueError(msg)
    return int(text)


def extract_number(value: object) -> int | None:
    """Best-effort number extraction from a metadata value.

    Accepts integers, bare digit strings (``0002``), and markdown links
    (``[0002](0002-choose-y.md)``). Returns None when nothing numeric
    leads the value.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if value is None:
        return None
    match = _LEADING_NUMBER.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def build_filename(number: int, title: str, extension: str) -> str:
    """Build the canonical document filename."""
    return f"{format_number(number)}-{slugify(title)}.{extension.lstrip('.')}"


def number_from_filename(path: Path) -> int | None:
    """Return the leading 4-digit number of a document filename, if any."""
    match = _NUMBER_PREFIX.match(path.name)
    if match is None:
        return None
    return int(match.group(1))


def title_from_filename(path: Path) -> str | None:
    """De-slugify a document filename into a display title.

    ``0001-my-title.md`` becomes ``My Title``. Returns None when the
    filename has no slug part.
    """
    _, _, slug = path.stem.partition("-")
    words = [w for w in slug.split("-") if w]
    if not words:
        return None
    return " ".join(w[:1].upper() + w[1:] for w in words)


def markdown_link(number: int, filenames: dict[int, str]) -> str:
    """Render a cross-reference to *number*.

    Emits ``[0001](0001-slug.md)`` when the target is present in
    *filenames*, otherwise the bare zero-padded number.
    """
    target = filenames.get(number)
    if target is None:
        return format_number(number)
    return f"[{format_number(number)}]({target})"
