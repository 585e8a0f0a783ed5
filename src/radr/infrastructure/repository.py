"""Collection repository — the ADR directory on disk.

INVARIANT: Files are truth. Every :meth:`FsAdrRepository.list` call
re-reads and re-parses the whole directory; nothing is cached between
operations, and numbering is always derived from what is on disk.

Reads and writes are newline-preserving so that targeted updates leave
untouched lines byte-for-byte identical. I/O errors are never caught here.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

from radr.domain.content import parse_document
from radr.domain.records import AdrRecord, sort_records

logger = logging.getLogger(__name__)

# Extensions always recognised in addition to the configured one, so that
# documents written under an earlier ``format`` can still be reformatted.
KNOWN_EXTENSIONS: tuple[str, ...] = ("md", "mdx")


class AdrRepository(Protocol):
    """Storage boundary consumed by the service layer."""

    @property
    def root(self) -> Path: ...

    def list(self) -> list[AdrRecord]: ...

    def read(self, path: Path) -> str: ...

    def write(self, path: Path, content: str) -> None: ...

    def delete(self, path: Path) -> None: ...


def managed_extensions(configured: str) -> tuple[str, ...]:
    """The configured extension first, then the known ones, deduplicated."""
    ordered = [configured.lstrip("."), *KNOWN_EXTENSIONS]
    return tuple(dict.fromkeys(ordered))


class FsAdrRepository:
    """ADR documents stored as ``NNNN-slug.ext`` files in one directory."""

    def __init__(self, root: Path, *, extensions: tuple[str, ...] = ("md",)) -> None:
        self._root = root
        self._extensions = extensions
        alternatives = "|".join(re.escape(ext) for ext in extensions)
        self._pattern = re.compile(rf"^\d{{4}}-.*\.(?:{alternatives})$")

    @property
    def root(self) -> Path:
        return self._root

    def is_managed(self, path: Path) -> bool:
        """Whether *path*'s filename follows the document naming convention."""
        return self._pattern.match(path.name) is not None

    def list(self) -> list[AdrRecord]:
        """Parse every managed document, ordered by ``(number, filename)``.

        A directory that does not exist yields an empty list.
        """
        if not self._root.exists():
            return []
        records: list[AdrRecord] = []
        for path in sorted(self._root.iterdir()):
            if not path.is_file() or not self.is_managed(path):
                continue
            records.append(parse_document(self.read(path), path))
        logger.debug("Listed %d ADRs in %s", len(records), self._root)
        return sort_records(records)

    def read(self, path: Path) -> str:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()

    def write(self, path: Path, content: str) -> None:
        """Write *content* to *path*, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(content)

    def delete(self, path: Path) -> None:
        path.unlink()
