"""Summaries and figures for a recorded navigation run."""
from __future__ import annotations

import csv
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .core.logging_utils import EVENTS_FILENAME, META_FILENAME, TIMESERIES_FILENAME

FIGS_SUBDIR = "figs"


@dataclass(frozen=True)
class RecordedEvent:
    t: float
    kind: str
    body: str
    level: str
    details: object = None


@dataclass
class RunData:
    path: Path
    timeseries: Dict[str, np.ndarray]
    events: List[RecordedEvent]
    meta: dict = field(default_factory=dict)


@dataclass(frozen=True)
class FlightSummary:
    destination: str
    start_ms: float
    end_ms: Optional[float]
    apex_zoom: float
    label_ms: Optional[float]

    @property
    def duration_ms(self) -> Optional[float]:
        if self.end_ms is None:
            return None
        return self.end_ms - self.start_ms

    @property
    def label_fraction(self) -> Optional[float]:
        duration = self.duration_ms
        if self.label_ms is None or not duration:
            return None
        return (self.label_ms - self.start_ms) / duration


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    """Column name -> float array; an empty file gives empty columns."""

    with path.open("r", newline="") as fh:
        rows = list(csv.reader(fh))
    header, body = rows[0], [row for row in rows[1:] if row]
    if not body:
        return {name: np.empty(0) for name in header}
    table = np.asarray(body, dtype=float).reshape(len(body), len(header))
    return {name: table[:, index] for index, name in enumerate(header)}


def _parse_details(raw: str) -> object:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def load_events(path: Path) -> List[RecordedEvent]:
    with path.open("r", newline="") as fh:
        return [
            RecordedEvent(
                t=float(row["t"]),
                kind=row["type"],
                body=row["body"],
                level=row["level"],
                details=_parse_details(row.get("details") or ""),
            )
            for row in csv.DictReader(fh)
        ]


def load_run(run_dir: Path) -> RunData:
    meta_path = run_dir / META_FILENAME
    meta = json.loads(meta_path.read_text(encoding="utf-8")) if meta_path.exists() else {}
    return RunData(
        path=run_dir,
        timeseries=load_timeseries(run_dir / TIMESERIES_FILENAME),
        events=load_events(run_dir / EVENTS_FILENAME),
        meta=meta,
    )


def summarize_flights(
    ts: Dict[str, np.ndarray], events: List[RecordedEvent]
) -> List[FlightSummary]:
    """Pair each accepted fly-to with its label switch and arrival."""

    flights: List[FlightSummary] = []
    t = ts.get("t", np.empty(0))
    zoom = ts.get("log_distance", np.empty(0))
    pending: Optional[dict] = None

    for event in events:
        if event.kind == "FlyTo":
            details = event.details if isinstance(event.details, dict) else {}
            pending = {"destination": details.get("body", event.body), "start": event.t, "label": None}
        elif event.kind == "label" and pending is not None and pending["label"] is None:
            pending["label"] = event.t
        elif event.kind == "arrived" and pending is not None:
            flights.append(_summarize(pending, event.t, t, zoom))
            pending = None

    if pending is not None:
        flights.append(_summarize(pending, None, t, zoom))
    return flights


def _summarize(pending: dict, end: Optional[float], t: np.ndarray, zoom: np.ndarray) -> FlightSummary:
    mask = t >= pending["start"]
    if end is not None:
        mask &= t <= end
    apex = float(zoom[mask].max()) if zoom.size and mask.any() else float("nan")
    return FlightSummary(
        destination=pending["destination"],
        start_ms=pending["start"],
        end_ms=end,
        apex_zoom=apex,
        label_ms=pending["label"],
    )


def plot_flight_profile(fig_path: Path, ts: Dict[str, np.ndarray], flights: List[FlightSummary]) -> None:
    """Zoom and flight progress against time, label switches marked."""

    seconds = ts["t"] / 1000.0
    fig, (zoom_ax, progress_ax) = plt.subplots(2, 1, figsize=(8, 6), sharex=True)
    zoom_ax.plot(seconds, ts["log_distance"], color="#4dabf7")
    zoom_ax.set_ylabel("log10 distance [m]")
    progress_ax.plot(seconds, ts["progress"], color="#94d82d")
    progress_ax.set_ylabel("progress")
    progress_ax.set_xlabel("time [s]")
    for flight in flights:
        if flight.label_ms is None:
            continue
        for axis in (zoom_ax, progress_ax):
            axis.axvline(flight.label_ms / 1000.0, color="#d9480f", linestyle=":", alpha=0.6)
        zoom_ax.annotate(
            flight.destination,
            (flight.label_ms / 1000.0, flight.apex_zoom),
            textcoords="offset points",
            xytext=(4, -12),
            fontsize=8,
        )
    for axis in (zoom_ax, progress_ax):
        axis.grid(alpha=0.25)
    fig.suptitle("Flight profile")
    fig.tight_layout()
    fig.savefig(fig_path, dpi=150)
    plt.close(fig)


def plot_center_track(fig_path: Path, ts: Dict[str, np.ndarray]) -> None:
    """Top-down (x, z) track of the camera look-at point."""

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(ts["cx"], ts["cz"], color="#9775fa", linewidth=1.5)
    ax.plot(ts["cx"][-1:], ts["cz"][-1:], "o", color="#9775fa")
    ax.plot([0.0], [0.0], "o", color="#4a86f7", label="origin")
    ax.set_aspect("equal", "datalim")
    ax.set_xlabel("x [m]")
    ax.set_ylabel("z [m]")
    ax.set_title("Look-at track")
    ax.legend(loc="best")
    fig.tight_layout()
    fig.savefig(fig_path, dpi=150)
    plt.close(fig)


def format_summary(run: RunData, flights: List[FlightSummary]) -> List[str]:
    lines = [f"Run: {run.path.name}"]
    route = run.meta.get("bodies")
    if route:
        lines.append(" Route: " + " -> ".join(route))
    for flight in flights:
        parts = [f"{flight.destination}: apex {flight.apex_zoom:.2f}"]
        if flight.duration_ms is not None:
            parts.append(f"duration {flight.duration_ms:.0f} ms")
        if flight.label_fraction is not None:
            parts.append(f"label at {flight.label_fraction:.0%}")
        lines.append(" " + ", ".join(parts))
    return lines


def analyze_run(run_dir: Path) -> List[FlightSummary]:
    run = load_run(run_dir)
    flights = summarize_flights(run.timeseries, run.events)

    if run.timeseries.get("t", np.empty(0)).size:
        fig_dir = run_dir / FIGS_SUBDIR
        fig_dir.mkdir(parents=True, exist_ok=True)
        plot_flight_profile(fig_dir / "flight_profile.png", run.timeseries, flights)
        plot_center_track(fig_dir / "center_track.png", run.timeseries)

    print("\n".join(format_summary(run, flights)))
    return flights


__all__ = [
    "FlightSummary",
    "RecordedEvent",
    "RunData",
    "analyze_run",
    "format_summary",
    "load_events",
    "load_run",
    "load_timeseries",
    "summarize_flights",
]
