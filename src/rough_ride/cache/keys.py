"""Cache key naming conventions for the rough-ride cache layer."""
from __future__ import annotations

import hashlib
import json

_PREFIX = "rr"


# ── Snapshots ────────────────────────────────────────────────────────────

def snapshot_key(snapshot) -> str:
    """Stable hash of a RouteSnapshot: equal inputs give equal keys."""
    payload = json.dumps(snapshot.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode()).hexdigest()[:32]


# ── Route colors ─────────────────────────────────────────────────────────

def route_colors(snap_key: str) -> str:
    """Key for the colored segment list of one snapshot."""
    return f"{_PREFIX}:route_colors:{snap_key}"
