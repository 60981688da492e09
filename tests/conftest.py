import pytest

from fakes import FakeOptimizationClient, make_session
from src.route_planner.services.optimization.lifecycle import PlanLifecycle
from src.route_planner.services.session import PlanningSession


@pytest.fixture
def session() -> PlanningSession:
    return make_session()


@pytest.fixture
def fake_client() -> FakeOptimizationClient:
    return FakeOptimizationClient()


@pytest.fixture
def lifecycle(fake_client: FakeOptimizationClient) -> PlanLifecycle:
    return PlanLifecycle(fake_client, poll_interval_seconds=0, allowed_profiles=("car", "EUR_VAN"))
