"""
In-memory rate limiting for the admin login endpoint.
"""
import logging
import time
from typing import Dict, List
from fastapi import Request, HTTPException, status

from remotetrail.core import config

logger = logging.getLogger(__name__)

# {bucket:ip: [timestamps]}
rate_limit_store: Dict[str, List[float]] = {}


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    # Proxies put the original client first
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


def check_rate_limit(
    request: Request,
    bucket: str,
    max_requests: int,
    window_seconds: int,
) -> None:
    """
    Record a request for the caller and reject it once the window is full.

    Args:
        request: FastAPI request object
        bucket: Name separating independent limits (e.g. "login")
        max_requests: Maximum number of requests allowed in the window
        window_seconds: Sliding window length in seconds

    Raises:
        HTTPException: 429 if rate limit exceeded
    """
    key = f"{bucket}:{get_client_ip(request)}"
    now = time.time()

    prune_expired(bucket, now - window_seconds)
    recent = rate_limit_store.get(key, [])

    request_count = len(recent)
    if request_count >= max_requests:
        logger.warning(f"Rate limit exceeded for {key} ({request_count} requests in {window_seconds}s)")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds."
        )

    rate_limit_store[key] = recent + [now]


def prune_expired(bucket: str, cutoff: float) -> None:
    """Drop a bucket's timestamps at or before cutoff and forget callers left with none."""
    prefix = f"{bucket}:"
    for key in [k for k in rate_limit_store if k.startswith(prefix)]:
        recent = [ts for ts in rate_limit_store[key] if ts > cutoff]
        if recent:
            rate_limit_store[key] = recent
        else:
            del rate_limit_store[key]


def login_rate_limit(request: Request) -> None:
    """Dependency guarding POST /auth/login."""
    check_rate_limit(
        request,
        bucket="login",
        max_requests=config.LOGIN_RATE_LIMIT,
        window_seconds=config.LOGIN_RATE_WINDOW_SECONDS,
    )


def reset_rate_limits() -> None:
    rate_limit_store.clear()
