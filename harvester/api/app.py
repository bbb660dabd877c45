"""FastAPI application factory.

Routers
-------
All endpoint groups are mounted under their respective path prefix:

    /harvest   crawl a site into a knowledge record
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from harvester import __version__
from harvester.api.routers import harvest as harvest_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Harvester API",
        description=(
            "REST interface for the bounded same-site web harvester. "
            "Crawls a seed URL and returns its readable text as a single "
            "knowledge record."
        ),
        version=__version__,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(harvest_router.router, prefix="/harvest", tags=["harvest"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn harvester.api.app:app --reload
app = create_app()
