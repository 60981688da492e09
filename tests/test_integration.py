from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fakes import FakeGeocoder, FakeOptimizationClient, geocoded
from src.route_planner.exceptions import PlanRejectedError, ServiceResponseError
from src.route_planner.main import create_app
from src.route_planner.persistence.filesystem import FileStorage
from src.route_planner.services.optimization.lifecycle import PlanLifecycle
from src.route_planner.services.planner import PlannerService
from src.route_planner.services.session import LifecyclePhase

GEOCODER_RESULTS = {
    "Alexanderplatz": [
        geocoded("Alexanderplatz 1, 10178 Berlin", 52.52, 13.405),
        geocoded("Alexanderplatz, 86633 Neuburg", 48.73, 11.18),
    ],
    "Tempelhofer Damm": [geocoded("Tempelhofer Damm 1, 12101 Berlin", 52.4, 13.3)],
}


def _planner(client: FakeOptimizationClient, tmp_path: Path) -> PlannerService:
    lifecycle = PlanLifecycle(client, poll_interval_seconds=0, allowed_profiles=("car", "EUR_VAN"))
    return PlannerService(
        FakeGeocoder(GEOCODER_RESULTS),
        lifecycle,
        persist_results=True,
        storage_factory=lambda: FileStorage(root=tmp_path),
    )


@pytest.fixture
def optimization_client() -> FakeOptimizationClient:
    return FakeOptimizationClient()


@pytest.fixture
def planner(optimization_client: FakeOptimizationClient, tmp_path: Path) -> PlannerService:
    return _planner(optimization_client, tmp_path)


@pytest.fixture
def api_client(planner: PlannerService) -> TestClient:
    return TestClient(create_app(planner=planner))


def _add_transport(api_client: TestClient) -> dict:
    pickup = api_client.get("/api/locations/search", params={"service_type": "pickup", "text": "Alexanderplatz"})
    assert pickup.status_code == 200
    assert [s["label"] for s in pickup.json()["suggestions"]] == [
        "Alexanderplatz 1, 10178 Berlin, Germany",
        "Alexanderplatz, 86633 Neuburg, Germany",
    ]
    api_client.get("/api/locations/search", params={"service_type": "delivery", "text": "Tempelhofer Damm"})

    first = api_client.post("/api/locations/select", json={"service_type": "pickup", "index": 0})
    assert first.json()["can_add_transport"] is False
    second = api_client.post("/api/locations/select", json={"service_type": "delivery", "index": 0})
    assert second.json()["can_add_transport"] is True

    response = api_client.post(
        "/api/transports",
        json={"pickup_from": "08:00", "pickup_to": "12:00", "pickup_service_minutes": 5},
    )
    assert response.status_code == 201
    return response.json()


def test_full_planning_flow(api_client: TestClient, optimization_client: FakeOptimizationClient, tmp_path: Path):
    overview = _add_transport(api_client)
    assert overview == {
        "transports": [
            {
                "transport_id": "Transport-P1-D1",
                "pickup_address": "Alexanderplatz 1, 10178 Berlin",
                "delivery_address": "Tempelhofer Damm 1, 12101 Berlin",
            }
        ],
        "can_start_optimization": True,
    }

    started = api_client.post("/api/optimization", json={"vehicle_count": "1", "profile": "car", "wait": True})
    assert started.status_code == 202
    assert started.json() == {"phase": "DONE", "plan_id": "plan-1", "busy": False, "error": None}
    assert optimization_client.created_plans[0].transports[0].pickup_service_time == 300

    kpis = api_client.get("/api/optimization/kpis").json()
    assert kpis["used_vehicles"] == 1
    assert kpis["planned_transports"] == 1
    assert kpis["formatted"]["distance"] == "12.345 km"

    route = api_client.get("/api/optimization/route").json()
    assert route["vehicle_id"] == "Vehicle 1"
    assert route["travel_time"] == "00 h 35 min"
    assert [stop["event"] for stop in route["stops"]] == ["Pickup", "Delivery"]

    switched = api_client.post("/api/optimization/vehicle", json={"step": 1})
    assert switched.status_code == 200
    assert switched.json()["vehicle_index"] == 0

    geojson = api_client.get("/api/optimization/map").json()
    assert geojson["type"] == "FeatureCollection"

    output_dirs = list((tmp_path / "outputs").glob("plan_plan-1_*"))
    assert output_dirs
    assert (output_dirs[0] / "summary.json").exists()

    cleared = api_client.delete("/api/transports")
    assert cleared.status_code == 200
    assert api_client.get("/api/transports").json() == {"transports": [], "can_start_optimization": False}
    assert api_client.get("/api/optimization/kpis").status_code == 404


def test_results_unavailable_before_optimization(api_client: TestClient):
    for path in ("/api/optimization/kpis", "/api/optimization/route", "/api/optimization/map"):
        assert api_client.get(path).status_code == 404
    assert api_client.post("/api/optimization/vehicle", json={"step": 1}).status_code == 404


def test_start_without_transports_is_bad_request(api_client: TestClient, optimization_client: FakeOptimizationClient):
    response = api_client.post("/api/optimization", json={"profile": "car", "wait": True})

    assert response.status_code == 400
    assert optimization_client.calls == []


def test_unknown_profile_is_bad_request(api_client: TestClient):
    _add_transport(api_client)

    response = api_client.post("/api/optimization", json={"profile": "SPACESHIP", "wait": True})

    assert response.status_code == 400
    assert "car" in response.json()["detail"]["details"]["allowed_profiles"]


def test_service_plan_rejection_is_bad_request(tmp_path: Path):
    error_body = {"errorCode": "GENERAL_VALIDATION_ERROR", "description": "Invalid opening interval."}
    client = FakeOptimizationClient(
        create_error=PlanRejectedError("Service rejected the plan.", status_code=400, payload=error_body)
    )
    planner = _planner(client, tmp_path)
    api_client = TestClient(create_app(planner=planner))
    _add_transport(api_client)

    response = api_client.post("/api/optimization", json={"profile": "car", "wait": True})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == error_body
    status_payload = api_client.get("/api/optimization/status").json()
    assert status_payload["phase"] == "FAILED"
    assert status_payload["error"]["error"] == error_body


def test_other_service_failures_are_bad_gateway(tmp_path: Path):
    error_body = {"errorCode": "GENERAL_INTERNAL_SERVER_ERROR"}
    client = FakeOptimizationClient(
        start_error=ServiceResponseError("Service responded with HTTP 500.", status_code=500, payload=error_body)
    )
    api_client = TestClient(create_app(planner=_planner(client, tmp_path)))
    _add_transport(api_client)

    response = api_client.post("/api/optimization", json={"profile": "car", "wait": True})

    assert response.status_code == 502
    assert response.json()["detail"]["error"] == error_body


def test_commands_conflict_while_optimizing(api_client: TestClient, planner: PlannerService):
    _add_transport(api_client)
    planner.session.phase = LifecyclePhase.OPTIMIZING

    assert api_client.post("/api/optimization", json={"profile": "car"}).status_code == 409
    assert api_client.delete("/api/transports").status_code == 409
    assert api_client.get("/api/transports").json()["can_start_optimization"] is False
    assert api_client.get("/api/optimization/status").json()["busy"] is True


def test_invalid_opening_time_is_rejected(api_client: TestClient):
    response = api_client.post("/api/transports", json={"pickup_from": "8 o'clock"})

    assert response.status_code == 422


def test_health_and_map_config(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}
    config = api_client.get("/api/map/config").json()
    assert config["api_key_header"] == "apiKey"
