"""CreateService — new ADR documents.

Pipeline: NUMBER → RENDER → WRITE → INDEX → RESPOND

The next number is ``max(existing) + 1`` (1 on an empty collection); gaps
are never filled. Content comes from, in priority order, the configured
external template, else the configured representation around the packaged
default body.
"""

from __future__ import annotations

import logging

from radr.domain.content import detect_representation, extract_body_tail, render_document
from radr.domain.lifecycle import AdrStatus
from radr.domain.records import AdrRecord, filename_map
from radr.domain.slugs import build_filename, format_number, markdown_link
from radr.infrastructure.templates import (
    TemplateUnreadableError,
    render_default_body,
    render_external_template,
)
from radr.services._helpers import today_iso
from radr.services.base import BaseService
from radr.services.result import ServiceResult, failure
from radr.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class CreateService(BaseService):
    """Creates ADR documents and keeps the index in step."""

    @traced
    def create(self, title: str, *, supersedes: int | None = None) -> ServiceResult:
        """Create a new ``Proposed`` ADR dated today.

        Args:
            title: Display title; the filename uses its slug.
            supersedes: Number of the ADR this one replaces. Only recorded
                here; marking the old ADR is :meth:`UpdateService.supersede`.
        """
        op = "create"
        records = self._repo.list()
        number = max((r.number for r in records), default=0) + 1
        path = self._repo.root / build_filename(number, title, self._config.extension)
        today = today_iso()
        filenames = filename_map(records)
        status = str(AdrStatus.PROPOSED)

        with trace_span("render"):
            if self._config.template is not None:
                try:
                    content = render_external_template(
                        self._config.template,
                        NUMBER=format_number(number),
                        TITLE=title,
                        DATE=today,
                        STATUS=status,
                        SUPERSEDES=(
                            markdown_link(supersedes, filenames) if supersedes is not None else ""
                        ),
                    )
                except TemplateUnreadableError as exc:
                    return failure(op, "TEMPLATE_UNREADABLE", str(exc), path=str(exc.path))
                representation = detect_representation(content)
            else:
                representation = self._config.representation
                draft = AdrRecord(
                    number=number,
                    title=title,
                    status=status,
                    date=today,
                    supersedes=supersedes,
                    path=path,
                    body_tail=render_default_body(title=title),
                )
                content = render_document(draft, representation, filenames)

        self._repo.write(path, content)
        logger.debug("Created ADR %s at %s", format_number(number), path)

        record = AdrRecord(
            number=number,
            title=title,
            status=status,
            date=today,
            supersedes=supersedes,
            representation=representation,
            path=path,
            body_tail=extract_body_tail(content),
        )
        self._write_index([*records, record])
        return ServiceResult(ok=True, op=op, data=record.to_summary())
