"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single ``httpx.AsyncClient`` for link
verification (shared across all requests via
``request.app.state.link_client``) so keep-alive connections are reused
between analyses.  On shutdown it closes the client cleanly.

Routers
-------
    /analyze  — single-page SEO analysis
    /health   — liveness probe
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seo_analyzer.api.routers import analyze as analyze_router
from seo_analyzer.config import settings
from seo_analyzer.links.verifier import build_client
from seo_analyzer.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the link-check client on startup and close it on shutdown."""
    client = build_client()
    app.state.link_client = client
    try:
        yield
    finally:
        await client.aclose()


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    setup_logging(settings.log_level)

    app = FastAPI(
        title="SEO Analyzer API",
        description=(
            "Fetches a web page and reports on-page SEO signals: title, meta "
            "description, headings, image alt coverage, link classification "
            "with broken-link verification, structured data, keyword "
            "suggestions and a heuristic score."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(analyze_router.router, tags=["analyze"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn seo_analyzer.api.app:app --port 3001
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("seo_analyzer.api.app:app", host="0.0.0.0", port=settings.port)
