from __future__ import annotations

import argparse
import json
import logging
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.table import Table

from rough_ride.config import settings
from rough_ride.core.colors import FALLBACK_COLOR, to_css_rgb, to_hex
from rough_ride.core.engine import RouteSnapshot, run_pipeline
from rough_ride.core.models import RoughnessConfig, RoughnessSample, ViewContext


def _read_job(path: Path, sensitivity: float, speed_influence: float) -> RouteSnapshot:
    data = json.loads(path.read_text(encoding="utf-8"))
    return RouteSnapshot(
        route=tuple((p[0], p[1]) for p in data.get("route", [])),
        samples=tuple(RoughnessSample(**s) for s in data.get("samples", [])),
        view=ViewContext(**data.get("view", {})),
        config=RoughnessConfig(sensitivity=sensitivity, speed_influence=speed_influence),
    )


def _save_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--job", default="jobs/sample_job.json", help="Path to a route/samples/view JSON file")
    ap.add_argument("--sensitivity", type=float, default=settings.sensitivity)
    ap.add_argument("--speed-influence", type=float, default=settings.speed_influence)
    ap.add_argument("--out", default="jobs/last_run_segments.json")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    snapshot = _read_job(Path(args.job), args.sensitivity, args.speed_influence)
    segments = run_pipeline(snapshot)

    console = Console()

    counts = Counter(s.color for s in segments)
    table = Table(title=f"Rough Ride: {len(snapshot.route)} route pts, {len(snapshot.samples)} samples")
    table.add_column("Color")
    table.add_column("Swatch")
    table.add_column("Segments", justify="right")
    table.add_column("Share", justify="right")

    total = max(1, len(segments))
    for color, n in counts.most_common():
        label = to_css_rgb(color) + (" (no data)" if color == FALLBACK_COLOR else "")
        table.add_row(label, f"[on {to_hex(color)}]    [/]", str(n), f"{100.0 * n / total:.1f}%")

    console.print(table)

    out_path = Path(args.out)
    _save_json(
        out_path,
        [{"a": list(s.start), "b": list(s.end), "color": to_hex(s.color)} for s in segments],
    )
    console.print(f"Saved: {out_path.resolve()}")


if __name__ == "__main__":
    main()
