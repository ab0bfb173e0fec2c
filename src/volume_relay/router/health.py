"""Router – health check."""

from fastapi import APIRouter

from src.volume_relay.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe plus the relay settings that shape client-visible errors."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "upstream_timeout": settings.upstream_timeout,
    }
