"""ADR status lifecycle.

Status is stored as display text rather than a closed enum because
external templates may inject arbitrary values. The operations of this
tool only ever produce these transitions:

- ``Proposed -> Accepted`` and ``Proposed -> Rejected`` (date refreshed)
- ``{Proposed|Accepted|Rejected} -> Superseded by <N>`` (date kept)

INVARIANT: a record with ``superseded_by`` set always carries a
``Superseded by <N>`` status. No transition clears ``superseded_by``.
"""

from __future__ import annotations

import re
from enum import StrEnum

from radr.domain.slugs import format_number


class AdrStatus(StrEnum):
    """Statuses produced by the create and transition operations."""

    PROPOSED = "Proposed"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


# Targets of the transition operation. Both refresh the record date.
DECISION_STATUSES: frozenset[AdrStatus] = frozenset({AdrStatus.ACCEPTED, AdrStatus.REJECTED})

# Status assumed for documents that carry no status line at all.
DEFAULT_STATUS = AdrStatus.ACCEPTED

_SUPERSEDED_PATTERN = re.compile(r"^Superseded by\b", re.IGNORECASE)


def superseded_status(new_number: int) -> str:
    """Status text for a record replaced by *new_number*."""
    return f"Superseded by {format_number(new_number)}"


def is_superseded_status(status: str) -> bool:
    """Check whether *status* is a ``Superseded by ...`` text."""
    return _SUPERSEDED_PATTERN.match(status.strip()) is not None
