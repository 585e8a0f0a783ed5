"""BaseService — shared foundation for the ADR services.

Every service receives the :class:`AdrConfig` and a repository at
construction time. Each public operation starts from a fresh
``repository.list()``; nothing is cached between calls.
"""

from __future__ import annotations

import logging

from radr.config.models import AdrConfig
from radr.domain.index import render_index
from radr.domain.records import AdrRecord
from radr.infrastructure.repository import AdrRepository, FsAdrRepository, managed_extensions

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CreateService(BaseService):
            def create(self, title: str) -> ServiceResult:
                records = self._repo.list()
                ...
    """

    def __init__(self, config: AdrConfig, repository: AdrRepository | None = None) -> None:
        self._config = config
        if repository is None:
            repository = FsAdrRepository(
                config.adr_dir,
                extensions=managed_extensions(config.extension),
            )
        self._repo = repository

    def _write_index(self, records: list[AdrRecord]) -> None:
        """Regenerate the index document from *records*."""
        self._repo.write(self._config.index_path, render_index(records))
        logger.debug("Wrote index %s (%d entries)", self._config.index_path, len(records))

    def _refresh(self) -> list[AdrRecord]:
        """Re-list the collection and regenerate the index from it."""
        records = self._repo.list()
        self._write_index(records)
        return records
