"""
FastAPI application entry point.
Challenge: Mount routes, middleware (sessions, CORS, Prometheus), startup events (MongoDB connect).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app
from starlette.middleware.sessions import SessionMiddleware

from storeapi.api.router import api_router
from storeapi.config import get_settings
from storeapi.core.errors import register_error_handlers
from storeapi.db.session import connect_to_mongo, ensure_indexes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: connect and create indexes; any failure aborts startup. Shutdown: close the client."""
    settings = get_settings()
    client, db = await connect_to_mongo(settings)
    await ensure_indexes(db)
    app.state.mongo_client = client
    app.state.db = db
    try:
        yield
    finally:
        app.state.db = None
        client.close()
        logger.info("MongoDB connection closed")


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        description="Users and products over MongoDB, with session login guarding product writes.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/api-docs",
    )
    app.state.db = None

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        same_site="lax",
    )
    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    register_error_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": "Welcome to the API!",
            "documentation": "Visit /api-docs for the OpenAPI documentation",
            "endpoints": [
                "/api/users - User management",
                "/api/products - Product management",
                "/api-docs - OpenAPI documentation",
            ],
        }

    return app


app = create_app()
