"""Output files for dump: timestamped backup and atomic write."""

from __future__ import annotations

import os
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path

TMP_PREFIX = ".matlit_tmp_"


def backup(path: str | Path) -> str:
    """Copy an existing output file aside before it is replaced.

    ``cfg.m`` becomes ``cfg.20260101T120000Z.bak.m`` next to the original.
    """
    path = Path(path)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    backup_path = path.with_name(f"{path.stem}.{stamp}.bak{path.suffix}")
    shutil.copy2(path, backup_path)
    return str(backup_path)


def atomic_write(target: str | Path, data: bytes) -> None:
    """Replace ``target`` with ``data`` so readers never see a partial file."""
    target = Path(target)
    fd, tmp_path = tempfile.mkstemp(dir=target.parent, suffix=target.suffix, prefix=TMP_PREFIX)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise


def write_literal(target: str | Path, text: str) -> None:
    """Write serialized literal text to ``target`` as UTF-8."""
    atomic_write(target, text.encode("utf-8"))


def read_text_safe(path: str | Path) -> str:
    """Read a text file, dropping a leading UTF-8 BOM if present."""
    return Path(path).read_text(encoding="utf-8-sig")
