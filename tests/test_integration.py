from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.archroute.main import create_app


@pytest.fixture
def api_client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    from src.archroute.persistence.filesystem import FileStorage
    from src.archroute.services.routing import service as routing_service

    def no_osrm():
        raise ValueError("OSRM base URL is not configured.")

    monkeypatch.setattr(routing_service, "FileStorage", lambda: FileStorage(root=tmp_path))
    monkeypatch.setattr(routing_service, "OSRMClient", no_osrm)
    return TestClient(create_app())


def _buildings():
    return [
        {"id": "gate", "name": "Brandenburg Gate", "latitude": 52.5163, "longitude": 13.3777, "year_built": 1791},
        {"id": "tower", "name": "Fernsehturm", "latitude": 52.5208, "longitude": 13.4094, "year_built": 1969},
        {"id": "reichstag", "name": "Reichstag", "latitude": 52.5186, "longitude": 13.3762, "year_built": 1894},
    ]


def test_root_and_health(api_client: TestClient):
    root = api_client.get("/")
    assert root.status_code == 200
    assert root.json()["status"] == "running"

    health = api_client.get("/api/health")
    assert health.status_code == 200
    assert health.json() == {"status": "ok"}


def test_order_endpoint(api_client: TestClient):
    payload = {
        "points": [
            {"id": "A", "latitude": 0, "longitude": 0},
            {"id": "C", "latitude": 0, "longitude": 2},
            {"id": "B", "latitude": 0, "longitude": 1},
        ]
    }
    response = api_client.post("/api/routes/order", json=payload)

    assert response.status_code == 200
    route = response.json()["route"]
    assert [stop["point_id"] for stop in route["stops"]] == ["A", "B", "C"]
    assert route["total_distance_km"] == pytest.approx(222.4, abs=1.0)
    assert route["difficulty"] == "hard"


def test_order_endpoint_rejects_out_of_range_coordinates(api_client: TestClient):
    payload = {"points": [{"id": "A", "latitude": 95, "longitude": 0}, {"id": "B", "latitude": 0, "longitude": 0}]}
    response = api_client.post("/api/routes/order", json=payload)

    assert response.status_code == 400
    assert "Latitude" in response.json()["detail"]


def test_order_endpoint_maps_unexpected_errors_to_500(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.archroute.api.routes import routes as routes_module

    def broken(payload):
        raise RuntimeError("matrix exploded")

    monkeypatch.setattr(routes_module, "order_points", broken)
    payload = {"points": [{"id": "A", "latitude": 0, "longitude": 0}, {"id": "B", "latitude": 0, "longitude": 1}]}
    response = api_client.post("/api/routes/order", json=payload)

    assert response.status_code == 500
    assert "matrix exploded" in response.json()["detail"]


def test_generate_endpoint(api_client: TestClient, tmp_path: Path):
    payload = {
        "city": "Berlin",
        "buildings": _buildings(),
        "strategies": ["optimal", "chronological"],
        "persist": True,
    }
    response = api_client.post("/api/routes/generate", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["city"] == "Berlin"
    optimal, chronological = body["routes"]
    assert [stop["point_id"] for stop in optimal["stops"]] == ["gate", "reichstag", "tower"]
    assert [stop["point_id"] for stop in chronological["stops"]] == ["gate", "reichstag", "tower"]
    assert optimal["geometry"]["source"] == "straight_line"

    output_dirs = list((tmp_path / "outputs").glob("routes_*"))
    assert len(output_dirs) == 1
    assert (output_dirs[0] / "routes.geojson").exists()


def test_generate_endpoint_validation_errors(api_client: TestClient):
    response = api_client.post("/api/routes/generate", json={"buildings": _buildings()[:1]})
    assert response.status_code == 400

    response = api_client.post("/api/routes/generate", json={"buildings": _buildings(), "strategies": ["scenic"]})
    assert response.status_code == 422


def test_dependency_health_without_configuration(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.archroute.config import settings

    monkeypatch.setattr(settings, "osrm_base_url", None)
    monkeypatch.setattr(settings, "supabase_url", None)

    osrm = api_client.get("/api/health/osrm")
    assert osrm.status_code == 200
    assert osrm.json() == {"service": "osrm", "healthy": False}

    database = api_client.get("/api/health/database")
    assert database.status_code == 200
    assert database.json()["configured"] is False
