"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; readiness also pings the document store.
"""

from fastapi import APIRouter
from pymongo.errors import PyMongoError

from storeapi.config import get_settings
from storeapi.core.errors import ServiceUnavailable
from storeapi.db.session import Database

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(db: Database):
    """Readiness: can the store answer a ping?"""
    try:
        await db.command("ping")
    except PyMongoError as exc:
        raise ServiceUnavailable("Database not reachable", error=str(exc)) from exc
    return {"status": "ready"}
