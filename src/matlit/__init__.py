"""matlit — serialize nested Python values to MATLAB-style literal text."""

from matlit.contracts.common import (
    CyclicValueError,
    SerializeError,
    UnsupportedRankError,
    UnsupportedTypeError,
)
from matlit.engine.serializer import describe, serialize, serialize_value
from matlit.engine.values import Cell, Kind, classify

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "CyclicValueError",
    "Kind",
    "SerializeError",
    "UnsupportedRankError",
    "UnsupportedTypeError",
    "classify",
    "describe",
    "serialize",
    "serialize_value",
]
