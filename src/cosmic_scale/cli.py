"""Command line entry point: body positions, recorded fly-through runs and run analysis."""
from __future__ import annotations

import argparse
import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from .analysis import analyze_run
from .core.logging_utils import LAST_RUN_MARKER, RunLogger
from .core.positions import PositionMode, all_body_positions
from .core.timekeeping import utc_now
from .data.bodies import UnknownBodyError, get_body, get_physical
from .engine import Engine, FlyTo, dispatch
from .view.log_scale import format_distance

log = logging.getLogger(__name__)

DEFAULT_RUNS_DIR = Path("data") / "runs"
SETTLE_FRAMES = 30


class SteppedClock:
    """Millisecond time source advanced by hand, one frame at a time."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, delta_ms: float) -> float:
        self.now_ms += delta_ms
        return self.now_ms


def _parse_date(text: Optional[str]) -> datetime:
    if not text:
        return utc_now()
    date = datetime.fromisoformat(text)
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return date


def cmd_positions(args: argparse.Namespace) -> int:
    date = _parse_date(args.date)
    mode = PositionMode(args.mode)
    positions = all_body_positions(date, mode)
    print(f"{mode.value} positions at {date.isoformat()}")
    for key, pos in positions.items():
        dist = math.sqrt(float(pos @ pos))
        print(
            f" {key:<8} x={pos[0]: .4e} y={pos[1]: .4e} z={pos[2]: .4e}  |r|={format_distance(dist)}"
        )
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    body = get_body(args.body)
    physical = get_physical(args.body)
    print(body.name)
    for label, value in body.facts.rows():
        print(f" {label:<9} {value}")
    print(f" {'Radius':<9} {format_distance(physical.radius_real)}")
    print(f" {'Tilt':<9} {math.degrees(physical.axial_tilt):.2f} deg")
    if physical.has_atmosphere:
        print(f" {'Atmos.':<9} {physical.atmosphere_thickness:g} radii")
    print(f" Fun fact: {body.facts.fun_fact}")
    return 0


def record_flights(
    bodies: Sequence[str],
    *,
    fps: float = 60.0,
    runs_dir: Path = DEFAULT_RUNS_DIR,
    date: Optional[datetime] = None,
) -> Path:
    """Fly through ``bodies`` in order with a stepped clock and record the run."""

    for body in bodies:
        get_body(body)

    frame_ms = 1000.0 / fps
    clock = SteppedClock()
    start_date = date or utc_now()

    with RunLogger(runs_dir) as recorder:
        recorder.write_meta(
            {
                "bodies": list(bodies),
                "fps": fps,
                "date": start_date.isoformat(),
                "created": datetime.now(timezone.utc).isoformat(),
            }
        )
        engine = Engine(wall_clock=lambda: start_date, time_source=clock, recorder=recorder)
        engine.frame(frame_ms, now_ms=clock())

        for body in bodies:
            if not dispatch(engine, FlyTo(body), now_ms=clock()):
                log.warning("Skipping %s: already there", body)
                continue
            while engine.navigation.is_navigating():
                engine.frame(frame_ms, now_ms=clock.advance(frame_ms))
            for _ in range(SETTLE_FRAMES):
                engine.frame(frame_ms, now_ms=clock.advance(frame_ms))

    log.info("Recorded run %s", recorder.run_dir)
    return recorder.run_dir


def cmd_fly(args: argparse.Namespace) -> int:
    run_dir = record_flights(
        args.bodies,
        fps=args.fps,
        runs_dir=args.runs_dir,
        date=_parse_date(args.date) if args.date else None,
    )
    print(f"Run saved to {run_dir}")
    return 0


def resolve_run_dir(run_dir: Optional[str], runs_dir: Path) -> Path:
    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = runs_dir / run_dir
        return run_path
    last_run_file = runs_dir / LAST_RUN_MARKER
    if not last_run_file.exists():
        raise FileNotFoundError(f"No run given and {last_run_file} is missing")
    return runs_dir / last_run_file.read_text(encoding="utf-8").strip()


def cmd_analyze(args: argparse.Namespace) -> int:
    run_path = resolve_run_dir(args.run_dir, args.runs_dir)
    if not run_path.is_dir():
        raise FileNotFoundError(f"Run directory not found: {run_path}")
    analyze_run(run_path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cosmic-scale",
        description="Orbital positions and multi-scale navigation.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    positions = sub.add_parser("positions", help="Print body positions for a date")
    positions.add_argument("--date", help="ISO 8601 date (default: now, UTC)")
    positions.add_argument(
        "--mode",
        choices=[mode.value for mode in PositionMode],
        default=PositionMode.EARTH_RELATIVE.value,
    )
    positions.set_defaults(func=cmd_positions)

    info = sub.add_parser("info", help="Print facts about a body")
    info.add_argument("body", help="Body key, e.g. mars")
    info.set_defaults(func=cmd_info)

    fly = sub.add_parser("fly", help="Record a fly-through between bodies")
    fly.add_argument("bodies", nargs="+", help="Body keys to visit in order")
    fly.add_argument("--fps", type=float, default=60.0, help="Simulated frame rate")
    fly.add_argument("--date", help="ISO 8601 date used for positions")
    fly.add_argument("--runs-dir", type=Path, default=DEFAULT_RUNS_DIR)
    fly.set_defaults(func=cmd_fly)

    analyze = sub.add_parser("analyze", help="Summarize and plot a recorded run")
    analyze.add_argument("run_dir", nargs="?", help="Run directory or run id (default: last run)")
    analyze.add_argument("--runs-dir", type=Path, default=DEFAULT_RUNS_DIR)
    analyze.set_defaults(func=cmd_analyze)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except UnknownBodyError as exc:
        parser.error(f"unknown body {exc.args[0]!r}")
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
