"""Rate limiting middleware for SimpleData.

Data routes are limited per API key (or client address when no key is
sent). Project creation has its own, hourly budget.
"""

import math

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from simpledata.core.config import get_settings
from simpledata.core.logging import get_logger
from simpledata.infrastructure.api.middleware.rate_limit_storage import rate_limit_storage

logger = get_logger(__name__)

DATA_PATH_PREFIXES = ("/api/", "/collections", "/schema/")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce rate limits on API requests."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request and enforce rate limits.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint to call.

        Returns:
            The response from the application or a 429 error.
        """
        settings = get_settings()

        if not settings.rate_limit_enabled:
            return await call_next(request)

        path = request.url.path
        client = f"ip:{request.client.host}" if request.client else "ip:unknown"

        if request.method == "POST" and path.rstrip("/") == "/projects":
            key = f"projects:{client}"
            limit = settings.project_create_limit_per_hour
            rate = limit / 60.0
            burst = float(limit)
            message = "Too many projects created. Try again later."
        elif path.startswith(DATA_PATH_PREFIXES):
            api_key = request.headers.get(settings.api_key_header)
            key = f"key:{api_key}" if api_key else client
            limit = settings.rate_limit_per_minute
            rate = float(limit)
            burst = settings.rate_limit_burst
            message = f"Too many requests. Limit: {limit} requests per minute."
        else:
            return await call_next(request)

        is_allowed, remaining, seconds = rate_limit_storage.consume(key, rate, burst=burst)

        if not is_allowed:
            retry_after = max(1, math.ceil(seconds))
            logger.warning(
                "Rate limit exceeded",
                path=path,
                limit=limit,
                retry_after=retry_after,
            )
            return JSONResponse(
                status_code=429,
                content={"success": False, "error": message},
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(int(seconds))
        return response
