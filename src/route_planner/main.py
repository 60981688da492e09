"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, locations, optimization, transports
from .config import settings
from .services.planner import PlannerService


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    planner = getattr(app.state, "planner", None)
    if planner is not None:
        await planner.shutdown()


def create_app(planner: PlannerService | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        root_path="",
        lifespan=lifespan,
    )
    app.state.planner = planner
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(locations.router, prefix=settings.api_prefix)
    app.include_router(transports.router, prefix=settings.api_prefix)
    app.include_router(optimization.router, prefix=settings.api_prefix)
    return app


app = create_app()
