"""Run output directories for optimized plans."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from itertools import count
from pathlib import Path
from typing import Any

from ..config import settings
from ..schemas.optimization import OptimizedPlanModel
from ..services.export.geojson import routes_to_geojson, save_geojson
from ..services.outputs.plan_formatter import optimized_plan_to_csv, optimized_plan_to_json

logger = logging.getLogger(__name__)

SUMMARY_FILE = "summary.json"
ROUTES_CSV_FILE = "routes.csv"
ROUTES_GEOJSON_FILE = "routes.geojson"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def run_directory_name(plan_id: str, created_at: datetime) -> str:
    """``plan_<id>_<UTC timestamp>``; characters unsafe in paths become ``-``."""
    safe_id = _UNSAFE_CHARS.sub("-", plan_id).strip(".-") or "unknown"
    return f"plan_{safe_id}_{created_at.strftime('%Y%m%dT%H%M%S')}Z"


class FileStorage:
    """Writes one directory per optimized plan below ``<data_root>/outputs``.

    A run directory holds the plan summary as JSON, one CSV row per stop and
    the routes as GeoJSON. Directories are never reused: a second run of the
    same plan within the same second gets a numbered suffix.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, plan_id: str) -> Path:
        base_name = run_directory_name(plan_id, datetime.now(timezone.utc))
        for attempt in count():
            path = self.output_root / (base_name if attempt == 0 else f"{base_name}_{attempt}")
            try:
                path.mkdir()
            except FileExistsError:
                continue
            return path

    def save_plan_run(self, plan: OptimizedPlanModel) -> Path:
        run_dir = self.make_run_directory(plan.id)
        self._write_json(run_dir / SUMMARY_FILE, optimized_plan_to_json(plan))
        (run_dir / ROUTES_CSV_FILE).write_text(optimized_plan_to_csv(plan), encoding="utf-8")
        save_geojson(routes_to_geojson(plan), run_dir / ROUTES_GEOJSON_FILE)
        logger.info(f"Saved {len(plan.routes)} routes of plan {plan.id} to {run_dir}")
        return run_dir

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=2)
