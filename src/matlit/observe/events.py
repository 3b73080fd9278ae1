"""Timing and NDJSON event emission."""

from __future__ import annotations

import sys
import time
from datetime import datetime, timezone
from typing import Any, TextIO

import orjson


class Timer:
    """Context-manager timer for the envelope's ``duration_ms``."""

    def __init__(self) -> None:
        self.start: float = 0
        self.elapsed_ms: int = 0

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.elapsed_ms = int((time.perf_counter() - self.start) * 1000)


class EventEmitter:
    """Writes one NDJSON line per lifecycle step of a command.

    ``EventEmitter("dump").emit("start")`` produces an event named
    ``dump.start``. Lines go to stderr so stdout stays a single envelope.
    """

    def __init__(self, command: str, enabled: bool = False, stream: TextIO | None = None) -> None:
        self.command = command
        self.enabled = enabled
        self.stream = stream
        self._start = time.perf_counter()

    def emit(self, step: str, data: dict[str, Any] | None = None) -> None:
        if not self.enabled:
            return
        stream = self.stream or sys.stderr
        payload = {
            "event": f"{self.command}.{step}",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "elapsed_ms": int((time.perf_counter() - self._start) * 1000),
            "data": data or {},
        }
        stream.write(orjson.dumps(payload).decode() + "\n")
        stream.flush()
