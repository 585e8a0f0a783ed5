"""Pydantic configuration model with code-baked defaults.

Sparse config contract: defaults live here, a ``radr.toml`` (or YAML/JSON
equivalent) only contains overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from radr.domain.records import Representation


class AdrConfig(BaseModel):
    """Settings consumed by the service layer.

    Attributes:
        adr_dir: Directory holding the ADR documents.
        index_name: Filename of the generated index inside ``adr_dir``.
        template: Optional external template for new ADRs.
        format: Storage extension of new or reformatted documents.
        front_matter: Store metadata in a YAML front-matter block.
    """

    model_config = {"frozen": True}

    adr_dir: Path = Path("docs/adr")
    index_name: str = "index.md"
    template: Path | None = None
    format: str = "md"
    front_matter: bool = False

    @property
    def index_path(self) -> Path:
        return self.adr_dir / self.index_name

    @property
    def extension(self) -> str:
        return self.format.lstrip(".")

    @property
    def representation(self) -> Representation:
        if self.front_matter:
            return Representation.FRONT_MATTER
        return Representation.PLAIN
