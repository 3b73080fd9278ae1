"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import orjson
import pytest
import yaml
from openpyxl import Workbook


@pytest.fixture()
def config_json(tmp_path: Path) -> Path:
    """A nested JSON config with scalars, a vector, text and a record array."""
    data = {
        "alpha": 0.5,
        "layers": [16, 32, 64],
        "label": "run-a",
        "runs": [{"seed": 1}, {"seed": 2}],
    }
    path = tmp_path / "cfg.json"
    path.write_bytes(orjson.dumps(data))
    return path


@pytest.fixture()
def mixed_json(tmp_path: Path) -> Path:
    """JSON whose 'tags' list mixes numbers and strings."""
    path = tmp_path / "mixed.json"
    path.write_bytes(orjson.dumps({"tags": [1, "a"], "n": 2}))
    return path


@pytest.fixture()
def null_yaml(tmp_path: Path) -> Path:
    """YAML with a null field, which has no literal form."""
    path = tmp_path / "null.yaml"
    path.write_text(yaml.safe_dump({"ok": 1, "missing": None}, sort_keys=False))
    return path


@pytest.fixture()
def matrix_npy(tmp_path: Path) -> Path:
    path = tmp_path / "m.npy"
    np.save(path, np.array([[1.5, 2.0], [3.0, 4.25]]))
    return path


@pytest.fixture()
def data_workbook(tmp_path: Path) -> Path:
    """Workbook with a numeric sheet and a text sheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Data"
    ws.append([1, 2])
    ws.append([3, 4])
    ws2 = wb.create_sheet("Names")
    ws2.append(["a", "b"])
    path = tmp_path / "data.xlsx"
    wb.save(str(path))
    wb.close()
    return path
