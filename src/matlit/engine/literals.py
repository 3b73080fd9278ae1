"""Literal tokens and qualified names.

Formatting rules:
- floating elements use ``%g`` (6 significant digits); NaN/Inf are spelled
  the way the target interpreter reads them
- integer elements use exact decimal; booleans become 1/0
- text is wrapped in single quotes without escaping
- records inside a collection become the placeholder ``'FIXME'``
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from matlit.contracts.common import UnsupportedTypeError
from matlit.engine.values import Kind, as_matrix, classify, numeric_subtype, text_rows

FLOAT_FORMAT = "%g"
INT_FORMAT = "%d"
FIXME_TOKEN = "'FIXME'"
INDENT = "  "


def field_name(parent: str, label: Any) -> str:
    """Qualified name of a record field: ``parent.label``."""
    return f"{parent}.{label}"


def indexed_name(parent: str, index: int) -> str:
    """Qualified name of a 1-based array element: ``parent(index)``."""
    return f"{parent}({index})"


def format_float(value: Any) -> str:
    x = float(value)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Inf" if x > 0 else "-Inf"
    return FLOAT_FORMAT % x


def format_int(value: Any) -> str:
    return INT_FORMAT % int(value)


def format_text(value: str) -> str:
    return f"'{value}'"


def format_row(row: list[Any], subtype: str) -> str:
    """Space-separated elements of one matrix row."""
    fmt = format_float if subtype == "float" else format_int
    return " ".join(fmt(x) for x in row)


def matrix_rows(arr: np.ndarray) -> list[str]:
    """Format every row of a 2-D numeric array."""
    subtype = numeric_subtype(arr)
    return [format_row(row, subtype) for row in arr.tolist()]


def format_scalar(value: Any, name: str = "") -> str:
    """Render one collection entry as a literal token.

    Numeric matrices are rendered inline as ``[ 1 2 ; 3 4 ]``.
    """
    kind = classify(value)
    if kind is Kind.TEXT:
        rows = text_rows(value, name)
        if len(rows) > 1:
            raise UnsupportedTypeError(
                f"Multi-row text cannot be nested in a collection ({name})", name=name
            )
        return format_text(rows[0] if rows else "")
    if kind is Kind.NUMERIC:
        arr = as_matrix(value, name)
        if arr.size == 0:
            return "[]"
        rows = matrix_rows(arr)
        if arr.shape == (1, 1):
            return rows[0]
        return f"[ {' ; '.join(rows)} ]"
    if kind in (Kind.RECORD, Kind.RECORD_ARRAY):
        return FIXME_TOKEN
    raise UnsupportedTypeError(
        f"Unsupported {kind.value} entry of type {type(value).__name__} in collection {name}",
        name=name,
    )
