"""Tests for value classification and coercion."""

from __future__ import annotations

import numpy as np
import pytest

from matlit import Cell, Kind, classify
from matlit.contracts.common import CyclicValueError, UnsupportedRankError, UnsupportedTypeError
from matlit.engine.values import as_cell, as_matrix, check_acyclic, numeric_subtype, text_rows


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        ({"a": 1}, Kind.RECORD),
        ([{"a": 1}, {"b": 2}], Kind.RECORD_ARRAY),
        (3, Kind.NUMERIC),
        (2.5, Kind.NUMERIC),
        (True, Kind.NUMERIC),
        (np.float32(1.0), Kind.NUMERIC),
        ([], Kind.NUMERIC),
        ([[1, 2], [3, 4]], Kind.NUMERIC),
        (np.arange(4), Kind.NUMERIC),
        ("abc", Kind.TEXT),
        (np.array(["ab", "cd"]), Kind.TEXT),
        (Cell([1, 2]), Kind.COLLECTION),
        (["a", 1], Kind.COLLECTION),
        (np.empty(2, dtype=object), Kind.COLLECTION),
        (None, Kind.UNSUPPORTED),
        (1j, Kind.UNSUPPORTED),
        ({1, 2}, Kind.UNSUPPORTED),
        (b"raw", Kind.UNSUPPORTED),
        (np.array([1j]), Kind.UNSUPPORTED),
    ],
)
def test_classify(value, kind):
    assert classify(value) is kind


def test_as_matrix_promotes_vectors_to_rows():
    assert as_matrix([1, 2, 3]).shape == (1, 3)
    assert as_matrix(5).shape == (1, 1)


def test_as_matrix_rank_error_carries_name():
    with pytest.raises(UnsupportedRankError) as exc_info:
        as_matrix(np.zeros((1, 1, 1)), "cfg.vol")
    assert exc_info.value.name == "cfg.vol"


def test_numeric_subtype():
    assert numeric_subtype(np.array([True])) == "bool"
    assert numeric_subtype(np.array([1], dtype=np.uint8)) == "int"
    assert numeric_subtype(np.array([1.0])) == "float"


def test_as_matrix_keeps_big_ints_exact():
    arr = as_matrix([-1, 2**63])
    assert arr.shape == (1, 2)
    assert arr.tolist() == [[-1, 2**63]]
    assert numeric_subtype(arr) == "int"


def test_as_matrix_small_ints_stay_native():
    assert as_matrix([1, 2]).dtype.kind == "i"


def test_text_rows():
    assert text_rows("x") == ["x"]
    assert text_rows(np.array("solo")) == ["solo"]
    assert text_rows(np.array(["ab", "cd"])) == ["ab", "cd"]


def test_cell_shape():
    assert Cell([]).shape == (0, 0)
    assert Cell([1, 2, 3]).shape == (1, 3)
    assert Cell([[1, 2], [3, 4], [5, 6]]).shape == (3, 2)
    assert Cell([[]]).size == 0


def test_cell_iterates_row_major():
    assert list(Cell([[1, 2], [3, 4]])) == [1, 2, 3, 4]


def test_cell_equality():
    assert Cell([1, 2]) == Cell([1, 2])
    assert Cell([1, 2]) != Cell([2, 1])


def test_cell_ragged_rows_rejected():
    with pytest.raises(UnsupportedTypeError):
        Cell([[1, 2], [3]])


def test_as_cell_from_object_array():
    arr = np.empty((2, 2), dtype=object)
    arr[:] = "x"
    assert as_cell(arr).shape == (2, 2)


def test_as_cell_rank_error():
    with pytest.raises(UnsupportedRankError):
        as_cell(np.empty((1, 1, 1), dtype=object), "c")


def test_check_acyclic_allows_sharing():
    shared = {"k": 1}
    check_acyclic({"a": shared, "b": [shared, shared]}, "r")


def test_check_acyclic_reports_path():
    inner: dict = {}
    outer = {"runs": [inner]}
    inner["back"] = outer
    with pytest.raises(CyclicValueError) as exc_info:
        check_acyclic(outer, "r")
    assert exc_info.value.name == "r.runs(1).back"
