"""Pydantic models for responses, plus the serializer error types."""

from matlit.contracts.common import (
    CyclicValueError,
    ErrorDetail,
    InputFormatError,
    Metrics,
    ResponseEnvelope,
    SerializeError,
    Target,
    UnsupportedRankError,
    UnsupportedTypeError,
    WarningDetail,
)
from matlit.contracts.responses import (
    DumpResult,
    NodeMeta,
    SerializeResult,
)

__all__ = [
    "CyclicValueError",
    "DumpResult",
    "ErrorDetail",
    "InputFormatError",
    "Metrics",
    "NodeMeta",
    "ResponseEnvelope",
    "SerializeError",
    "SerializeResult",
    "Target",
    "UnsupportedRankError",
    "UnsupportedTypeError",
    "WarningDetail",
]
