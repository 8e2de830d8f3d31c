"""
Tests for the FastAPI Application

Run with: pytest tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.store import live_feed, series_store

client = TestClient(app)


def create(name="Load", **config):
    body = {"name": name}
    if config:
        body["config"] = config
    return client.post("/api/v1/series", json=body)


class TestSeriesEndpoints:
    """Test series creation, query, advance and delete."""

    def setup_method(self):
        series_store.clear()

    def test_create_series(self):
        response = create("Energy", point_count=12, unit="kWh", min_value=0, max_value=50)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Energy"
        assert body["unit"] == "kWh"
        assert len(body["data"]) == 12
        assert body["config"]["point_count"] == 12
        assert all(0 <= p["value"] <= 50 for p in body["data"])
        assert body["id"] in series_store

    def test_create_with_defaults(self):
        response = client.post("/api/v1/series", json={"name": "Defaults"})

        assert response.status_code == 201
        assert len(response.json()["data"]) == 24

    def test_create_rejects_inverted_bounds(self):
        response = create(min_value=10, max_value=5)
        assert response.status_code == 422

    def test_create_rejects_zero_points(self):
        response = create(point_count=0)
        assert response.status_code == 422

    def test_preview_not_stored(self):
        response = client.post("/api/v1/series/preview", json={"name": "Preview"})

        assert response.status_code == 200
        assert len(series_store) == 0

    def test_batch_create(self):
        response = client.post(
            "/api/v1/series/batch",
            json={"names": ["A", "B"], "configs": [{"point_count": 5}]},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["count"] == 2
        assert body["stored"] is True
        assert len(body["series"][0]["data"]) == 5
        assert len(series_store) == 2

    def test_list_series(self):
        create("One")
        create("Two")

        body = client.get("/api/v1/series").json()

        assert body["count"] == 2
        assert {s["name"] for s in body["series"]} == {"One", "Two"}

    def test_get_series(self):
        series_id = create("Fetch").json()["id"]

        response = client.get(f"/api/v1/series/{series_id}")

        assert response.status_code == 200
        assert response.json()["id"] == series_id

    def test_get_unknown_series(self):
        response = client.get("/api/v1/series/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] is True
        assert "does-not-exist" in response.json()["message"]

    def test_advance_series(self):
        created = create("Tick", point_count=6).json()

        response = client.post(f"/api/v1/series/{created['id']}/advance")

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 6
        assert body["step_count"] == created["step_count"] + 1
        assert body["data"][:-1] == created["data"][1:]

    def test_advance_multiple_steps_with_overrides(self):
        created = create("Tick", point_count=6, unit="kW").json()

        response = client.post(
            f"/api/v1/series/{created['id']}/advance",
            json={"steps": 3, "config": {"volatility": 0.5}},
        )

        body = response.json()
        assert body["step_count"] == created["step_count"] + 3
        assert body["config"]["volatility"] == 0.5
        assert body["unit"] == "kW"
        assert series_store.get(created["id"]).step_count == body["step_count"]

    def test_advance_cannot_resize(self):
        created = create("Fixed", point_count=6).json()

        response = client.post(
            f"/api/v1/series/{created['id']}/advance",
            json={"config": {"point_count": 8}},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "point_count"

    def test_advance_unknown_series(self):
        response = client.post("/api/v1/series/nope/advance")
        assert response.status_code == 404

    def test_delete_series(self):
        series_id = create("Doomed").json()["id"]

        response = client.delete(f"/api/v1/series/{series_id}")

        assert response.status_code == 200
        assert response.json()["deleted"] is True
        assert client.get(f"/api/v1/series/{series_id}").status_code == 404


class TestPresetEndpoints:
    """Test preset listing and preset-based creation."""

    def setup_method(self):
        series_store.clear()

    def test_list_presets(self):
        body = client.get("/api/v1/presets").json()
        assert len(body["presets"]) == 6

    def test_get_preset(self):
        response = client.get("/api/v1/presets/network_load")

        assert response.status_code == 200
        assert response.json()["config"]["unit"] == "Mbps"

    def test_unknown_preset(self):
        assert client.get("/api/v1/presets/unknown").status_code == 422

    def test_create_from_preset(self):
        response = client.post("/api/v1/presets/energy_consumption/series")

        assert response.status_code == 201
        assert response.json()["name"] == "Energy Consumption"
        assert len(series_store) == 1

    def test_create_from_preset_without_storing(self):
        response = client.post(
            "/api/v1/presets/cost_savings/series",
            params={"store": "false", "point_count": 6, "name": "Savings"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Savings"
        assert len(body["data"]) == 6
        assert len(series_store) == 0


class TestDatasetEndpoints:
    """Test chart dataset endpoints."""

    def test_pie(self):
        data = client.get("/api/v1/datasets/pie", params={"total": 50, "seed": 1}).json()
        assert sum(d["value"] for d in data) == 50

    def test_seed_repeats(self):
        first = client.get("/api/v1/datasets/network", params={"seed": 3}).json()
        second = client.get("/api/v1/datasets/network", params={"seed": 3}).json()
        assert first == second

    @pytest.mark.parametrize("chart", ["heatmap", "radar", "bubble", "waterfall", "sankey"])
    def test_chart_endpoints(self, chart):
        assert client.get(f"/api/v1/datasets/{chart}").status_code == 200

    def test_sankey_needs_two_nodes(self):
        response = client.get("/api/v1/datasets/sankey", params={"node_count": 1})
        assert response.status_code == 422

    @pytest.mark.parametrize("bound", [{"min_value": "nan"}, {"max_value": "inf"}])
    def test_heatmap_non_finite_bounds(self, bound):
        response = client.get("/api/v1/datasets/heatmap", params=dict(bound, seed=1))

        assert response.status_code == 422
        assert response.json()["error"] is True


class TestSystemEndpoints:
    """Test root, health and probe endpoints."""

    def test_root(self):
        body = client.get("/").json()
        assert body["api_base"] == "/api/v1"

    def test_liveness(self):
        assert client.get("/live").json() == {"alive": True}

    def test_health_without_live_updates(self, monkeypatch):
        monkeypatch.setenv("LIVE_UPDATES", "false")
        body = client.get("/health").json()

        assert body["status"] == "ok"
        assert body["live_feed"] == "stopped"

    def test_health_degraded_when_feed_stopped(self, monkeypatch):
        monkeypatch.setenv("LIVE_UPDATES", "true")
        assert client.get("/health").json()["status"] == "degraded"
        assert client.get("/ready").status_code == 503

    def test_lifespan_runs_feed(self, monkeypatch):
        monkeypatch.setenv("LIVE_UPDATES", "true")

        with TestClient(app) as live_client:
            body = live_client.get("/health").json()
            assert body["status"] == "ok"
            assert body["live_feed"] == "running"
            assert live_client.get("/ready").json() == {"ready": True}

        assert not live_feed.running

    def test_info(self):
        body = client.get("/info").json()
        assert body["store"]["type"] == "in-memory"
