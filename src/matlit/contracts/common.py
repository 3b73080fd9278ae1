"""Common Pydantic models: response envelope, errors, warnings, metrics."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SerializeError(Exception):
    """Base class for fatal serialization failures.

    ``name`` is the qualified name of the node being emitted when the
    failure happened.
    """

    code = "ERR_SERIALIZE"

    def __init__(self, message: str, *, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class UnsupportedTypeError(SerializeError):
    """Raised for a value whose kind has no literal form."""

    code = "ERR_UNSUPPORTED_TYPE"


class UnsupportedRankError(SerializeError):
    """Raised for numeric or character arrays with more than 2 dimensions."""

    code = "ERR_UNSUPPORTED_RANK"


class CyclicValueError(SerializeError):
    """Raised when a container is reachable from itself."""

    code = "ERR_CYCLIC_VALUE"


class InputFormatError(Exception):
    """Raised when an input data file cannot be parsed."""


class Target(BaseModel):
    """Identifies the input file and root name for a command."""

    file: str | None = None
    name: str | None = None
    out: str | None = None


class WarningDetail(BaseModel):
    """Structured warning."""

    code: str
    message: str
    path: str | None = None


class ErrorDetail(BaseModel):
    """Structured error."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class Metrics(BaseModel):
    """Execution metrics."""

    duration_ms: int = 0


class ResponseEnvelope(BaseModel):
    """Standard response envelope returned by every command."""

    ok: bool = True
    command: str = ""
    target: Target = Field(default_factory=Target)
    result: Any = None
    warnings: list[WarningDetail] = Field(default_factory=list)
    errors: list[ErrorDetail] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)
