"""
Health check router for liveness and readiness probes.
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from secret_santa.database.connections import get_mongo_client, get_redis_client

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check():
    """Returns 200 if the API process is running."""
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    summary="Readiness check with dependencies",
)
async def readiness_check():
    """
    Readiness check that verifies backing services.

    MongoDB is required: without it the endpoint answers 503. Redis only
    backs rate limiting, so losing it reports "degraded" with a 200.
    """
    checks = {
        "api": "healthy",
        "mongodb": "unknown",
        "redis": "unknown",
    }

    try:
        client = await get_mongo_client()
        await client.admin.command("ping")
        checks["mongodb"] = "healthy"
    except Exception as e:
        checks["mongodb"] = f"unhealthy: {str(e)}"

    try:
        redis = await get_redis_client()
        await redis.ping()
        checks["redis"] = "healthy"
    except Exception as e:
        checks["redis"] = f"unhealthy: {str(e)}"

    if checks["mongodb"] != "healthy":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "checks": checks},
        )

    all_healthy = all(v == "healthy" for v in checks.values())
    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }
