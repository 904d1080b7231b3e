from __future__ import annotations

import argparse
import json
from pathlib import Path


def render_html(segs: list) -> str:
    """Standalone Leaflet page drawing each colored sub-segment."""
    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Rough Ride – Last Run Map</title>
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css" />
  <style>
    body {{ margin: 0; font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; }}
    #map {{ height: 100vh; width: 100vw; }}
  </style>
</head>
<body>
<div id="map"></div>
<script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
<script>
  const segs = {json.dumps(segs)};

  const map = L.map('map');

  L.tileLayer('https://{{s}}.tile.openstreetmap.org/{{z}}/{{x}}/{{y}}.png', {{
    maxZoom: 19,
    attribution: '&copy; OpenStreetMap contributors'
  }}).addTo(map);

  segs.forEach((seg) => {{
    L.polyline([seg.a, seg.b], {{ color: seg.color, weight: 6, opacity: 0.9 }}).addTo(map);
  }});

  const bounds = L.latLngBounds(segs.flatMap(s => [s.a, s.b]));
  map.fitBounds(bounds.pad(0.2));
</script>
</body>
</html>
"""


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--segments", default="jobs/last_run_segments.json")
    ap.add_argument("--out", default="jobs/last_run_map.html")
    args = ap.parse_args()

    segs = json.loads(Path(args.segments).read_text(encoding="utf-8"))
    if not segs:
        raise SystemExit(f"No segments found in {args.segments}")

    out_path = Path(args.out)
    out_path.write_text(render_html(segs), encoding="utf-8")
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
