"""HTTP middleware package."""

from simpledata.infrastructure.api.middleware.rate_limit_middleware import RateLimitMiddleware
from simpledata.infrastructure.api.middleware.rate_limit_storage import (
    RateLimitStorage,
    rate_limit_storage,
)

__all__ = ["RateLimitMiddleware", "RateLimitStorage", "rate_limit_storage"]
