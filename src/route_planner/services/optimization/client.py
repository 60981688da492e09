"""HTTP client for the route optimization plan endpoints."""

from __future__ import annotations

import logging
from typing import Any

from ...config import settings
from ...exceptions import PlanRejectedError, ServiceResponseError
from ...models.domain import Plan
from ...schemas.optimization import OperationModel, OptimizedPlanModel, PlanCreatedModel
from ..http import ServiceClient
from .payloads import plan_to_payload

logger = logging.getLogger(__name__)


class RouteOptimizationClient(ServiceClient):
    def __init__(
        self,
        *args: Any,
        path: str | None = None,
        tweaks_to_objective: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.path = (path or settings.route_optimization_path).strip("/")
        self.tweaks_to_objective = tweaks_to_objective or settings.tweaks_to_objective

    @property
    def plans_url(self) -> str:
        return f"{self.base_url}/{self.path}/plans"

    def plan_url(self, plan_id: str) -> str:
        return f"{self.plans_url}/{plan_id}"

    async def create_plan(self, plan: Plan) -> PlanCreatedModel:
        try:
            response = await self._request("POST", self.plans_url, json=plan_to_payload(plan))
        except ServiceResponseError as exc:
            if exc.status_code == 400:
                raise PlanRejectedError(
                    "Service rejected the plan.", status_code=exc.status_code, payload=exc.payload
                ) from exc
            raise
        created = self._parse(PlanCreatedModel, response)
        logger.info(f"Created plan {created.id} with {len(plan.transports)} transports and {len(plan.vehicles)} vehicles")
        return created

    async def start_optimization(self, plan_id: str) -> bool:
        await self._request(
            "POST",
            f"{self.plan_url(plan_id)}/operation/optimization",
            params={"tweaksToObjective": self.tweaks_to_objective},
        )
        return True

    async def get_optimization_progress(self, plan_id: str) -> OperationModel:
        response = await self._request("GET", f"{self.plan_url(plan_id)}/operation")
        return self._parse(OperationModel, response)

    async def get_optimized_plan(self, plan_id: str) -> OptimizedPlanModel:
        response = await self._request("GET", self.plan_url(plan_id))
        return self._parse(OptimizedPlanModel, response)
