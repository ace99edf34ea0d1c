"""Main FastAPI application module.

This module builds the FastAPI application, attaches the in-memory store and
registers all route handlers.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from alumni_portal.api.routes import (
    auth,
    documents,
    events,
    forum,
    galleries,
    jobs,
    messages,
    university,
    users,
)
from alumni_portal.config import API_HOST, API_PORT, CORS_ALLOWED_ORIGINS
from alumni_portal.core.logging_config import setup_logging
from alumni_portal.utils.memory_store import MemStorage
from alumni_portal.utils.seed import seed_defaults

API_TITLE = "Alumni Portal API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Backend API service for the university alumni portal."


def create_app(storage: Optional[MemStorage] = None) -> FastAPI:
    """Build the application around a store.

    Args:
        storage: Store to serve from. A fresh one is created when omitted.

    Returns:
        The configured FastAPI application.
    """
    setup_logging()

    app = FastAPI(title=API_TITLE, description=API_DESCRIPTION, version=API_VERSION)

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.storage = storage if storage is not None else MemStorage()

    # Register route handlers
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(events.router)
    app.include_router(jobs.router)
    app.include_router(galleries.router)
    app.include_router(forum.router)
    app.include_router(documents.router)
    app.include_router(messages.router)
    app.include_router(university.router)

    @app.on_event("startup")
    async def startup_tasks() -> None:
        """Seed the default administrator and university information."""
        await seed_defaults(app.state.storage)

    @app.get("/", summary="API root", tags=["Info"])
    def root() -> dict:
        """Return API information and documentation links."""
        return {
            "name": API_TITLE,
            "version": API_VERSION,
            "description": API_DESCRIPTION,
            "docs": {
                "swagger": "/docs",
                "redoc": "/redoc",
            },
            "health": "/api/health",
        }

    @app.get("/api/health", summary="Health check", tags=["Health"])
    def health() -> dict:
        """Health check endpoint.

        Returns:
            Dictionary with status "ok".
        """
        return {"status": "ok"}

    return app


app = create_app()


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    server_url = f"http://{API_HOST}:{API_PORT}"
    print(f"Alumni Portal API: {server_url}")
    print(f"API docs: {server_url}/docs")

    uvicorn.run("alumni_portal.app:app", host=API_HOST, port=API_PORT, reload=True)
