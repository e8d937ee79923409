"""
Rate limiting utilities backed by Redis.

Fixed-window counters keyed by endpoint and client IP. Redis being down
must not take the assignment endpoints with it, so failures let the
request through.
"""
import logging
from typing import Optional

from fastapi import Request
from redis.exceptions import RedisError

from secret_santa.config import get_settings
from secret_santa.core.errors import RateLimited
from secret_santa.database.connections import get_redis_client

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Extract client IP from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def check_rate_limit(
    ip: str,
    endpoint: str,
    limit: int,
    window_seconds: int = 60,
) -> bool:
    """
    Check if a request should be rate limited.

    Args:
        ip: Client IP address
        endpoint: Endpoint identifier (e.g., "create")
        limit: Max requests allowed per window
        window_seconds: Time window in seconds

    Returns:
        True if request is allowed, False if rate limited
    """
    key = f"ratelimit:{endpoint}:{ip}"
    try:
        redis = await get_redis_client()
        current = await redis.incr(key)
        if current == 1:
            await redis.expire(key, window_seconds)
    except (RedisError, OSError) as e:
        logger.warning(f"Rate limiter unavailable, allowing request: {e}")
        return True
    return current <= limit


async def enforce_rate_limit(request: Request, endpoint: str, limit: Optional[int]) -> None:
    """Raise RateLimited when the client exceeded `limit` for `endpoint`."""
    settings = get_settings()
    if not settings.rate_limit_enabled or limit is None:
        return
    client_ip = get_client_ip(request)
    if not await check_rate_limit(client_ip, endpoint, limit):
        logger.info(f"Rate limit hit on {endpoint} for {client_ip}")
        raise RateLimited()
