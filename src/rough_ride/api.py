"""FastAPI REST backend for the rough-ride coloring engine."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, FiniteFloat

from rough_ride.cache.redis_client import redis_ok
from rough_ride.config import settings
from rough_ride.contracts.segment_contract import ColoredPoint, ColoredSegment
from rough_ride.core.colors import to_css_rgb
from rough_ride.core.engine import RouteSnapshot, compute_route_colors
from rough_ride.core.models import MotionSample, RoughnessConfig, RoughnessSample, ViewContext
from rough_ride.core.motion import MotionRoughnessScorer
from rough_ride.core.scoring import color_points

log = logging.getLogger(__name__)

app = FastAPI(title="Rough Ride", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class TuningIn(BaseModel):
    sensitivity: Optional[float] = Field(default=None, ge=0.5, le=3.0)
    speed_influence: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    def to_config(self) -> RoughnessConfig:
        base = settings.roughness_config()
        return RoughnessConfig(
            sensitivity=self.sensitivity if self.sensitivity is not None else base.sensitivity,
            speed_influence=(
                self.speed_influence if self.speed_influence is not None else base.speed_influence
            ),
        )


class RouteColorsRequest(TuningIn):
    route: List[Tuple[FiniteFloat, FiniteFloat]] = Field(default_factory=list, description="[[lat, lon], ...]")
    samples: List[RoughnessSample] = Field(default_factory=list)
    view: ViewContext = Field(default_factory=ViewContext)


class PointColorsRequest(TuningIn):
    samples: List[RoughnessSample] = Field(default_factory=list)
    palette: Optional[Literal["gradient", "bucket"]] = None


class MotionScoreRequest(BaseModel):
    samples: List[MotionSample] = Field(default_factory=list)


class FeatureCollection(BaseModel):
    type: str = "FeatureCollection"
    features: List[Dict[str, Any]] = []


class ScoreOut(BaseModel):
    t_ms: float
    score: float


class MotionScoreResponse(BaseModel):
    scores: List[ScoreOut]
    final_score: float


# ---------------------------------------------------------------------------
# Output boundary: structured colors -> renderer-facing features
# ---------------------------------------------------------------------------

def _segment_feature(s: ColoredSegment) -> Dict[str, Any]:
    # GeoJSON wants [lon, lat]
    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": [[s.start[1], s.start[0]], [s.end[1], s.end[0]]],
        },
        "properties": {"color": to_css_rgb(s.color)},
    }


def _point_feature(p: ColoredPoint) -> Dict[str, Any]:
    props: Dict[str, Any] = {
        "color": to_css_rgb(p.color),
        "roughness": p.adjusted_roughness,
        "directional": p.directional,
    }
    if p.heading is not None:
        props["heading"] = p.heading
    if p.speed is not None:
        props["speed"] = p.speed
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [p.lon, p.lat]},
        "properties": props,
    }


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health():
    return {"status": "ok", "redis": redis_ok()}


@app.post("/route-colors", response_model=FeatureCollection)
def route_colors(req: RouteColorsRequest):
    try:
        snapshot = RouteSnapshot(
            route=tuple(req.route),
            samples=tuple(req.samples),
            view=req.view,
            config=req.to_config(),
        )
        segments = compute_route_colors(snapshot)
    except Exception as e:
        log.exception("route-colors failed")
        raise HTTPException(status_code=500, detail=str(e))

    return FeatureCollection(features=[_segment_feature(s) for s in segments])


@app.post("/point-colors", response_model=FeatureCollection)
def point_colors(req: PointColorsRequest):
    palette = req.palette or settings.marker_palette
    points = color_points(req.samples, req.to_config(), palette=palette)
    return FeatureCollection(features=[_point_feature(p) for p in points])


@app.post("/motion-score", response_model=MotionScoreResponse)
def motion_score(req: MotionScoreRequest):
    scorer = MotionRoughnessScorer(settings.roughness_config(), queue_size=settings.motion_queue_size)
    start = req.samples[0].t_ms if req.samples else None
    scorer.set_recording(True, now_ms=start)

    out: List[ScoreOut] = []
    for s in req.samples:
        score = scorer.ingest(s)
        if score is not None:
            out.append(ScoreOut(t_ms=s.t_ms, score=round(score, 3)))

    return MotionScoreResponse(scores=out, final_score=round(scorer.score, 3))
