"""
Health check API routes.
"""

from fastapi import APIRouter, Response, status

from satstream import __version__
from satstream.di.container import get_container

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health(response: Response):
    """
    Service health with database connectivity.

    Returns 503 when the database is unreachable.
    """
    container = get_container()
    db_healthy = await container.database.health_check()

    if not db_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if db_healthy else "degraded",
        "version": __version__,
        "components": {
            "database": "healthy" if db_healthy else "unhealthy",
            "relay": {"clients": container.broadcast_hub.client_count},
        },
    }
