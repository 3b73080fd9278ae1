"""Value kinds: classify Python/numpy values into the serializable union."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterator

import numpy as np

from matlit.contracts.common import (
    CyclicValueError,
    UnsupportedRankError,
    UnsupportedTypeError,
)

_NUMERIC_SCALARS = (bool, int, float, np.bool_, np.integer, np.floating)


class Kind(str, Enum):
    """Closed set of value kinds the serializer understands."""

    RECORD = "record"
    RECORD_ARRAY = "record_array"
    NUMERIC = "numeric"
    TEXT = "text"
    COLLECTION = "collection"
    UNSUPPORTED = "unsupported"


class Cell:
    """A 2-D grid of arbitrary values, emitted as a brace-delimited literal.

    A flat sequence becomes a single row. A sequence whose items are all
    lists or tuples is read as rows, which must have equal length. An
    object-dtype ndarray is taken as-is (up to 2 dimensions).
    """

    def __init__(self, items: Any = ()) -> None:
        self.rows: list[list[Any]] = _to_grid(items)

    @property
    def shape(self) -> tuple[int, int]:
        if not self.rows:
            return (0, 0)
        return (len(self.rows), len(self.rows[0]))

    @property
    def size(self) -> int:
        n_rows, n_cols = self.shape
        return n_rows * n_cols

    def __iter__(self) -> Iterator[Any]:
        """Iterate entries in row-major order."""
        for row in self.rows:
            yield from row

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.rows == other.rows

    def __repr__(self) -> str:
        return f"Cell({self.rows!r})"


def _to_grid(items: Any) -> list[list[Any]]:
    if isinstance(items, Cell):
        return [list(row) for row in items.rows]
    if isinstance(items, np.ndarray):
        if items.ndim > 2:
            raise UnsupportedRankError(f"Cell grids support at most 2 dimensions, got {items.ndim}")
        if items.ndim == 0:
            return [[items.item()]]
        if items.ndim == 1:
            return [list(items)] if items.size else []
        if items.size == 0:
            return []
        return [list(row) for row in items]
    items = list(items)
    if not items:
        return []
    if all(isinstance(item, (list, tuple)) for item in items):
        rows = [list(item) for item in items]
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise UnsupportedTypeError("Cell rows must all have the same length")
        return rows if width else []
    return [items]


def _is_numeric_nest(value: Any) -> bool:
    """True when every leaf of a nested list/tuple is a bool/int/float."""
    for item in value:
        if isinstance(item, (list, tuple)):
            if not _is_numeric_nest(item):
                return False
        elif not isinstance(item, _NUMERIC_SCALARS):
            return False
    return True


def classify(value: Any) -> Kind:
    """Report the Kind of a Python or numpy value."""
    if isinstance(value, Cell):
        return Kind.COLLECTION
    if isinstance(value, Mapping):
        return Kind.RECORD
    if isinstance(value, str):
        return Kind.TEXT
    if isinstance(value, _NUMERIC_SCALARS):
        return Kind.NUMERIC
    if isinstance(value, np.ndarray):
        dtype_kind = value.dtype.kind
        if dtype_kind in "biuf":
            return Kind.NUMERIC
        if dtype_kind in "US":
            return Kind.TEXT
        if dtype_kind == "O":
            return Kind.COLLECTION
        return Kind.UNSUPPORTED
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(item, Mapping) for item in value):
            return Kind.RECORD_ARRAY
        if _is_numeric_nest(value):
            return Kind.NUMERIC
        return Kind.COLLECTION
    return Kind.UNSUPPORTED


def _is_int_nest(value: Any) -> bool:
    """True for an int, or a nested list/tuple whose leaves are all ints (not bools)."""
    if isinstance(value, (bool, np.bool_)):
        return False
    if isinstance(value, (int, np.integer)):
        return True
    if isinstance(value, (list, tuple)):
        return all(_is_int_nest(item) for item in value)
    return False


def _exact_int_array(value: Any, name: str) -> np.ndarray:
    """Integer grid that never loses digits; object dtype when int64/uint64 overflow."""
    try:
        arr = np.asarray(value)
    except OverflowError:
        arr = None
    except ValueError as e:
        raise UnsupportedTypeError(f"Ragged numeric data at {name}: {e}", name=name) from e
    if arr is not None and arr.dtype.kind in "iu":
        return arr
    arr = np.array(value, dtype=object)
    if not all(isinstance(x, (int, np.integer)) for x in arr.flat):
        raise UnsupportedTypeError(f"Ragged numeric data at {name}", name=name)
    return arr


def as_matrix(value: Any, name: str = "") -> np.ndarray:
    """Coerce a NUMERIC value to a 2-D ndarray (vectors become one row).

    Python ints outside the int64/uint64 range are kept exact in an
    object-dtype grid.
    """
    if _is_int_nest(value):
        arr = _exact_int_array(value, name)
    else:
        try:
            arr = np.asarray(value)
        except ValueError as e:
            raise UnsupportedTypeError(f"Ragged numeric data at {name}: {e}", name=name) from e
        if arr.dtype.kind not in "biuf":
            raise UnsupportedTypeError(f"Not a numeric array at {name}: dtype {arr.dtype}", name=name)
    if arr.ndim > 2:
        raise UnsupportedRankError(
            f"Multidimensional arrays are not supported ({name} has {arr.ndim} dimensions)",
            name=name,
        )
    if arr.ndim < 2:
        arr = arr.reshape(1, -1)
    return arr


def numeric_subtype(arr: np.ndarray) -> str:
    """Element subtype of a numeric array: ``bool``, ``int`` or ``float``.

    Object-dtype arrays only come from exact big-int grids.
    """
    if arr.dtype.kind == "b":
        return "bool"
    if arr.dtype.kind in "iuO":
        return "int"
    return "float"


def text_rows(value: Any, name: str = "") -> list[str]:
    """Split a TEXT value into its rows."""
    if isinstance(value, str):
        return [value]
    arr = np.asarray(value)
    if arr.dtype.kind == "S":
        arr = np.char.decode(arr, "utf-8")
    if arr.ndim > 2:
        raise UnsupportedRankError(
            f"Multidimensional character arrays are not supported ({name} has {arr.ndim} dimensions)",
            name=name,
        )
    if arr.ndim == 0:
        return [str(arr.item())]
    if arr.ndim == 1:
        return [str(row) for row in arr]
    return ["".join(str(ch) for ch in row) for row in arr]


def as_cell(value: Any, name: str = "") -> Cell:
    """Coerce a COLLECTION value to a Cell."""
    if isinstance(value, Cell):
        return value
    try:
        return Cell(value)
    except (UnsupportedTypeError, UnsupportedRankError) as e:
        raise type(e)(f"{e} ({name})", name=name) from e


def _children(value: Any) -> list[tuple[str, Any]]:
    if isinstance(value, Mapping):
        return [(f".{label}", child) for label, child in value.items()]
    if isinstance(value, Cell):
        return [(f"{{{i}}}", child) for i, child in enumerate(value, start=1)]
    if isinstance(value, (list, tuple)):
        return [(f"({i})", child) for i, child in enumerate(value, start=1)]
    if isinstance(value, np.ndarray) and value.dtype.kind == "O":
        return [(f"{{{i}}}", child) for i, child in enumerate(value.flat, start=1)]
    return []


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, Cell, list, tuple)) or (
        isinstance(value, np.ndarray) and value.dtype.kind == "O"
    )


def check_acyclic(value: Any, name: str) -> None:
    """Raise CyclicValueError if any container is reachable from itself.

    Shared subtrees that do not loop back are allowed.
    """
    _check(value, name, set())


def _check(value: Any, name: str, path: set[int]) -> None:
    if not _is_container(value):
        return
    key = id(value)
    if key in path:
        raise CyclicValueError(f"Value refers back to itself at {name}", name=name)
    path.add(key)
    for suffix, child in _children(value):
        _check(child, name + suffix, path)
    path.discard(key)
