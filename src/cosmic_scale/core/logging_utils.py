"""Session recording for navigation runs.

A run lives in ``<root>/<run_id>/`` with ``timeseries.csv`` (one row per
frame), ``events.csv`` (commands, label switches, arrivals) and an optional
``meta.json``. ``<root>/last_run.txt`` always names the newest run.
"""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import IO, Optional, Sequence

TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
LAST_RUN_MARKER = "last_run.txt"


def allocate_run_dir(root_dir: Path, run_id: Optional[str] = None) -> Path:
    """Create and return a fresh run directory; existing runs are never reused."""

    base = run_id or f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_run"
    candidate = base
    suffix = 1
    while (root_dir / candidate).exists():
        candidate = f"{base}_{suffix}" if run_id else f"{base}_{suffix:02d}"
        suffix += 1
    run_dir = root_dir / candidate
    run_dir.mkdir(parents=True, exist_ok=False)
    return run_dir


class _BufferedCsv:
    """Header-first CSV file whose rows are written in batches."""

    def __init__(self, path: Path, header: Sequence[str], threshold: int) -> None:
        self.path = path
        self._fh: IO[str] = path.open("w", newline="")
        self._fh.write(",".join(header) + "\n")
        self._fh.flush()
        self._rows: list[str] = []
        self._threshold = max(1, threshold)

    def append(self, cells: Sequence[str]) -> None:
        self._rows.append(",".join(cells))
        if len(self._rows) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if self._rows:
            self._fh.write("\n".join(self._rows) + "\n")
            self._fh.flush()
            self._rows.clear()

    def close(self) -> None:
        self.flush()
        self._fh.close()


def _number(value: float) -> str:
    return f"{value:.10g}"


def _cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return _number(value)
    if isinstance(value, dict):
        # quoted so the commas inside the JSON survive a CSV reader
        text = json.dumps(value, sort_keys=True).replace('"', '""')
        return f'"{text}"'
    return str(value)


class RunLogger:
    """Buffered recorder for camera frames and navigation events."""

    TIMESERIES_HEADER = [
        "t",
        "progress",
        "log_distance",
        "azimuth",
        "polar",
        "cx",
        "cy",
        "cz",
        "sim_days",
    ]
    EVENTS_HEADER = ["t", "type", "body", "level", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.run_dir = allocate_run_dir(self.root_dir, run_id)
        self.run_id = self.run_dir.name

        self.timeseries_path = self.run_dir / TIMESERIES_FILENAME
        self.events_path = self.run_dir / EVENTS_FILENAME
        self.meta_path = self.run_dir / META_FILENAME

        self._timeseries = _BufferedCsv(
            self.timeseries_path, self.TIMESERIES_HEADER, timeseries_flush_threshold
        )
        self._events = _BufferedCsv(self.events_path, self.EVENTS_HEADER, events_flush_threshold)
        self._closed = False

        (self.root_dir / LAST_RUN_MARKER).write_text(self.run_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True, default=str)

    def log_frame(
        self,
        t_ms: float,
        progress: float,
        log_distance: float,
        azimuth: float,
        polar: float,
        center: Sequence[float],
        sim_days: float,
    ) -> None:
        cx, cy, cz = center
        self._timeseries.append(
            [_number(v) for v in (t_ms, progress, log_distance, azimuth, polar, cx, cy, cz, sim_days)]
        )

    def log_event(
        self,
        t_ms: float,
        kind: str,
        body: str,
        level: str,
        details: Optional[object] = None,
    ) -> None:
        self._events.append([_cell(v) for v in (t_ms, kind, body, level, details)])

    def close(self) -> None:
        if self._closed:
            return
        self._timeseries.close()
        self._events.close()
        self._closed = True

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = [
    "EVENTS_FILENAME",
    "LAST_RUN_MARKER",
    "META_FILENAME",
    "RunLogger",
    "TIMESERIES_FILENAME",
    "allocate_run_dir",
]
