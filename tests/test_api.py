from fastapi.testclient import TestClient

from rough_ride.api import app

client = TestClient(app)

ROUTE = [[45.0, 9.0], [45.0001, 9.0]]
VIEW = {"zoom_level": 16, "camera_lat": 45.0, "camera_lon": 9.0}


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "redis": False}


def test_route_colors_returns_css_colored_linestrings():
    body = {
        "route": ROUTE,
        "view": VIEW,
        "samples": [{"lat": 45.00005, "lon": 9.0, "raw_roughness": 5.0}],
        "sensitivity": 1.0,
        "speed_influence": 0.0,
    }
    r = client.post("/route-colors", json=body)
    assert r.status_code == 200
    fc = r.json()
    assert fc["type"] == "FeatureCollection"
    assert len(fc["features"]) == 3
    assert {f["properties"]["color"] for f in fc["features"]} == {"rgb(255, 255, 0)"}
    first = fc["features"][0]["geometry"]
    assert first["type"] == "LineString"
    assert first["coordinates"][0] == [9.0, 45.0]  # [lon, lat]


def test_route_colors_without_samples_is_fallback_blue():
    r = client.post("/route-colors", json={"route": ROUTE, "view": VIEW})
    assert r.status_code == 200
    assert {f["properties"]["color"] for f in r.json()["features"]} == {"rgb(59, 130, 246)"}


def test_route_colors_empty_route():
    r = client.post("/route-colors", json={"route": []})
    assert r.status_code == 200
    assert r.json()["features"] == []


def test_route_colors_rejects_bad_input():
    assert client.post("/route-colors", json={"route": [[45.0]]}).status_code == 422
    assert client.post("/route-colors", json={"route": ROUTE, "sensitivity": 9}).status_code == 422
    bad_sample = {"lat": 45.0, "lon": 9.0, "raw_roughness": 11}
    assert client.post("/route-colors", json={"route": ROUTE, "samples": [bad_sample]}).status_code == 422


def test_point_colors_bucket_palette_and_direction():
    body = {
        "samples": [
            {"lat": 45.0, "lon": 9.0, "raw_roughness": 1.0, "speed": 30.0, "heading": 45.0},
            {"lat": 45.1, "lon": 9.1, "raw_roughness": 6.0},
        ],
        "sensitivity": 1.0,
        "speed_influence": 0.0,
        "palette": "bucket",
    }
    r = client.post("/point-colors", json=body)
    assert r.status_code == 200
    feats = r.json()["features"]
    assert feats[0]["properties"]["color"] == "rgb(0, 255, 0)"
    assert feats[0]["properties"]["directional"] is True
    assert feats[0]["properties"]["heading"] == 45.0
    assert feats[1]["properties"]["color"] == "rgb(255, 165, 0)"
    assert "heading" not in feats[1]["properties"]
    assert feats[1]["geometry"]["coordinates"] == [9.1, 45.1]


def test_motion_score_replays_windows():
    samples = [{"x": 0.0, "y": 0.0, "z": 20.0, "t_ms": t} for t in range(0, 1001, 100)]
    r = client.post("/motion-score", json={"samples": samples})
    assert r.status_code == 200
    data = r.json()
    assert data["scores"] == [{"t_ms": 600.0, "score": 10.0}]
    assert data["final_score"] == 10.0


def test_motion_score_empty_batch():
    r = client.post("/motion-score", json={"samples": []})
    assert r.status_code == 200
    assert r.json() == {"scores": [], "final_score": 0.0}


def test_route_colors_rejects_non_finite_coordinates():
    for token in ("NaN", "Infinity", "-Infinity"):
        raw = '{"route": [[%s, 9.0], [45.0001, 9.0]]}' % token
        r = client.post("/route-colors", content=raw, headers={"content-type": "application/json"})
        assert r.status_code == 422
