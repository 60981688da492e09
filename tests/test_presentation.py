import pytest

from fakes import make_session, optimized_plan_payload
from src.route_planner.exceptions import IncompleteResultError, NoOptimizedPlanError
from src.route_planner.schemas.optimization import OptimizedPlanModel
from src.route_planner.services.export import build_route_lines, routes_to_geojson
from src.route_planner.services.outputs.plan_formatter import optimized_plan_to_csv
from src.route_planner.services.presentation import (
    build_route_details,
    compute_kpis,
    format_arrival_time,
    format_meters_to_kilometers,
    format_seconds_to_hhmm,
    map_configuration,
)


def _plan(**overrides) -> OptimizedPlanModel:
    return OptimizedPlanModel.model_validate(optimized_plan_payload(**overrides))


@pytest.mark.parametrize(
    ("meters", "expected"),
    [(12345, "12.345 km"), (12000, "12 km"), (500, "0.5 km"), (0, "0 km")],
)
def test_format_meters_to_kilometers(meters, expected):
    assert format_meters_to_kilometers(meters) == expected


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(2100, "00 h 35 min"), (3600, "01 h 00 min"), (37959, "10 h 32 min"), (0, "00 h 00 min")],
)
def test_format_seconds_to_hhmm(seconds, expected):
    assert format_seconds_to_hhmm(seconds) == expected


def test_format_arrival_time_converts_to_local_zone():
    assert format_arrival_time("2026-10-17T08:00:00Z", "UTC") == "08:00:00"
    assert format_arrival_time("2026-10-17T08:00:00Z", "Europe/Berlin") == "10:00:00"
    assert format_arrival_time(None) == ""


def test_route_details_for_selected_vehicle():
    session = make_session()
    session.optimized_plan = _plan()

    details = build_route_details(session)

    assert details.vehicle_id == "Vehicle 1"
    assert details.travel_distance == "12.345 km"
    assert details.travel_time == "00 h 35 min"
    assert [(row.number, row.location_id, row.event) for row in details.stops] == [
        (1, "P1", "Pickup"),
        (2, "D1", "Delivery"),
    ]
    assert details.stops[0].address == "Alexanderplatz 1, 10178 Berlin"
    assert [row.arrival_time for row in details.stops] == ["08:00:00", "08:35:00"]


def test_route_details_requires_result():
    with pytest.raises(NoOptimizedPlanError):
        build_route_details(make_session())


def test_route_details_index_out_of_range():
    session = make_session()
    session.optimized_plan = _plan()

    with pytest.raises(NoOptimizedPlanError):
        build_route_details(session, vehicle_index=4)


def test_route_details_used_vehicle_without_route():
    session = make_session()
    session.optimized_plan = _plan(routes=[])

    with pytest.raises(IncompleteResultError):
        build_route_details(session)


def test_compute_kpis_counts_and_totals():
    payload = optimized_plan_payload()
    payload["vehicles"].append({"id": "Vehicle 2", "profile": "car"})
    payload["unplannedVehicleIds"] = ["Vehicle 2"]
    payload["transports"].append(
        {"id": "Transport-P2-D2", "pickupLocationId": "P1", "deliveryLocationId": "D1"}
    )
    payload["unplannedTransportIds"] = ["Transport-P2-D2"]

    kpis = compute_kpis(OptimizedPlanModel.model_validate(payload))

    assert (kpis.used_vehicles, kpis.unused_vehicles) == (1, 1)
    assert (kpis.planned_transports, kpis.unplanned_transports) == (1, 1)
    assert kpis.totals["travel_time"] == 2100
    assert kpis.totals["waiting_time"] == 300
    assert kpis.formatted["driving_time"] == "00 h 25 min"
    assert kpis.formatted["distance"] == "12.345 km"


def test_compute_kpis_for_empty_result():
    kpis = compute_kpis(_plan(routes=[], vehicles=[], transports=[]))

    assert kpis.used_vehicles == 0
    assert kpis.totals["distance"] == 0
    assert kpis.formatted["travel_time"] == "00 h 00 min"


def test_route_lines_and_geojson():
    plan = _plan()

    lines = build_route_lines(plan)
    assert lines == [
        {"vehicle_id": "Vehicle 1", "color": "#02d8e0", "coordinates": [[52.52, 13.405], [52.4, 13.3]]}
    ]

    collection = routes_to_geojson(plan)
    kinds = [feature["properties"]["kind"] for feature in collection["features"]]
    assert kinds == ["route", "location", "location"]
    assert collection["features"][0]["geometry"]["coordinates"] == [[13.405, 52.52], [13.3, 52.4]]


def test_csv_output_has_one_row_per_stop():
    lines = optimized_plan_to_csv(_plan()).strip().splitlines()

    assert len(lines) == 3
    assert lines[1].startswith("Vehicle 1,1,P1,Transport-P1-D1,,")


def test_map_configuration_uses_api_key_header():
    config = map_configuration()

    assert config["api_key_header"] == "apiKey"
    assert "{z}" in config["tiles_url"]
    assert len(config["center"]) == 2
