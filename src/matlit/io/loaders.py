"""Load data files into serializable host values."""

from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import numpy as np
import openpyxl
import orjson
import yaml

from matlit.contracts.common import InputFormatError
from matlit.engine.values import Cell
from matlit.io.fileops import read_text_safe

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml", ".npy", ".xlsx", ".xlsm")


def load_value(path: str | Path) -> Any:
    """Load a JSON, YAML, NPY or Excel file. Raises FileNotFoundError or InputFormatError."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input file not found: {p}")
    suffix = p.suffix.lower()
    if suffix == ".json":
        return load_json(p)
    if suffix in (".yaml", ".yml"):
        return load_yaml(p)
    if suffix == ".npy":
        return load_npy(p)
    if suffix in (".xlsx", ".xlsm"):
        return load_workbook(p)
    raise InputFormatError(
        f"Unsupported input format '{suffix}'. Expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
    )


def load_json(path: str | Path) -> Any:
    try:
        return orjson.loads(read_text_safe(path))
    except orjson.JSONDecodeError as e:
        raise InputFormatError(f"Cannot parse JSON {path}: {e}") from e


def load_yaml(path: str | Path) -> Any:
    try:
        return yaml.safe_load(read_text_safe(path))
    except yaml.YAMLError as e:
        raise InputFormatError(f"Cannot parse YAML {path}: {e}") from e


def load_npy(path: str | Path) -> np.ndarray:
    try:
        return np.load(path, allow_pickle=False)
    except ValueError as e:
        raise InputFormatError(f"Cannot read NPY {path}: {e}") from e


def load_workbook(path: str | Path) -> dict[str, Any]:
    """Read every sheet's used range. Keys follow workbook sheet order."""
    try:
        wb = openpyxl.load_workbook(str(path), data_only=True, read_only=True)
    except Exception as e:
        raise InputFormatError(f"Cannot open workbook {path}: {e}") from e
    try:
        return {ws.title: _sheet_value(ws) for ws in wb.worksheets}
    finally:
        wb.close()


def _sheet_value(ws: Any) -> Any:
    rows = [list(row) for row in ws.iter_rows(values_only=True)]
    cells = [v for row in rows for v in row]
    if not cells or all(v is None for v in cells):
        return np.empty((0, 0))
    width = max(len(row) for row in rows)
    rows = [row + [None] * (width - len(row)) for row in rows]
    if all(isinstance(v, (int, float)) for row in rows for v in row):
        return np.asarray(rows)
    return Cell([[_cell_value(v) for v in row] for row in rows])


def _cell_value(value: Any) -> Any:
    if value is None:
        return np.empty((0, 0))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value
