# capital_marketplace/middleware/rate_limit.py
"""
Per-client sliding-window rate limiting.

Limits come from settings (rate_limit_max requests per
rate_limit_window_seconds). Excess requests get a 429 error envelope.
"""
import asyncio
import time
from typing import Dict, List

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from capital_marketplace.core.logger import get_logger
from capital_marketplace.schemas.common import ErrorResponse

logger = get_logger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-IP request limiting."""

    def __init__(self, app, max_requests: int = 100, window_seconds: int = 60):
        super().__init__(app)
        self.request_log: Dict[str, List[float]] = {}  # IP -> timestamp list
        self.lock = asyncio.Lock()
        self.max_requests = max_requests
        self.window_seconds = window_seconds

    async def dispatch(self, request: Request, call_next):
        client_ip = request.client.host if request.client else "unknown"
        now = time.time()

        async with self.lock:
            # Clean old timestamps older than window
            cutoff = now - self.window_seconds
            self._prune(cutoff)
            timestamps = [ts for ts in self.request_log.get(client_ip, []) if ts > cutoff]
            self.request_log[client_ip] = timestamps

            if len(timestamps) >= self.max_requests:
                retry_after = int(timestamps[0] + self.window_seconds - now) + 1
                logger.warning(
                    f"Rate limit exceeded for {client_ip}: "
                    f"{len(timestamps)} requests in {self.window_seconds}s"
                )
                return JSONResponse(
                    status_code=429,
                    content=ErrorResponse(
                        error="Rate limit exceeded",
                        code="RATE_LIMIT_EXCEEDED",
                        path=str(request.url.path),
                        retry_after=retry_after,
                    ).to_content(),
                    headers={"Retry-After": str(retry_after)},
                )

            timestamps.append(now)
            remaining = self.max_requests - len(timestamps)

        response = await call_next(request)

        # Add rate limit headers
        response.headers["X-RateLimit-Limit"] = str(self.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(max(0, remaining))
        response.headers["X-RateLimit-Reset"] = str(int(now) + self.window_seconds)

        return response

    def _prune(self, cutoff: float) -> None:
        """Forget clients with no requests inside the window."""
        idle = [
            ip for ip, timestamps in self.request_log.items()
            if not timestamps or timestamps[-1] <= cutoff
        ]
        for ip in idle:
            del self.request_log[ip]
