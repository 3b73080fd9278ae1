"""Command-specific result models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from matlit.contracts.common import WarningDetail


class SerializeResult(BaseModel):
    """Literal text produced for one root value."""

    name: str
    text: str = ""
    warnings: list[WarningDetail] = Field(default_factory=list)
    line_count: int = 0


class NodeMeta(BaseModel):
    """One node of a classified value tree."""

    name: str
    kind: str
    shape: list[int] | None = None  # rows, columns for grids
    subtype: str | None = None  # float / int / bool for numeric arrays


class DumpResult(BaseModel):
    """Result of a ``dump`` command."""

    name: str
    text: str | None = None  # omitted when written to --out
    line_count: int = 0
    out: str | None = None
    backup_path: str | None = None
