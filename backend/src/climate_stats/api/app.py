"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from climate_stats import __version__
from climate_stats.config import CORS_ORIGINS


def create_app() -> FastAPI:
    app = FastAPI(
        title="Climate Statistics API",
        version=__version__,
        description="Climatological statistics for yearly observation series",
    )

    # CORS for frontend dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from climate_stats.api.routers import statistics

    app.include_router(statistics.router, prefix="/forecast", tags=["statistics"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
