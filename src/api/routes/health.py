"""Health probe for container orchestration and load balancers."""

from fastapi import APIRouter
from loguru import logger

from src.infrastructure.database import check_database_connection

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, object]:
    """Report service status and document store reachability.

    An unreachable store reports ``degraded`` rather than failing the
    probe, so the process is not restarted for a store outage.
    """
    is_healthy, error_msg = await check_database_connection()
    if not is_healthy:
        logger.warning("Database health check failed: {}", error_msg)

    return {"status": "healthy" if is_healthy else "degraded", "database": is_healthy}
