"""FastAPI application factory.

Routers
-------
    /api/extract-flows  — crawl a site and return ranked user flows
    /health             — liveness probe
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flowmap.api.routers import flows as flows_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Flow Mapper API",
        description=(
            "Crawls a website and turns its pages into a small set of ranked, "
            "goal-oriented user flows (purchase, sign-in, support, ...)."
        ),
        version="0.1.0",
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(flows_router.router, prefix="/api", tags=["flows"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn flowmap.api.app:app --reload
app = create_app()
