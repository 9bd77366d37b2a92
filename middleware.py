# middleware.py
"""
HTTP middleware: request logging and per-IP rate limiting for /api/.
"""

import logging
import threading
import time
from typing import Dict, Tuple

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("access")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        client = request.client.host if request.client else "-"
        logger.info(
            f"METHOD={request.method} PATH={request.url.path} "
            f"STATUS={response.status_code} CLIENT={client} "
            f"DURATION={process_time:.4f}s"
        )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window limiter: at most `max_requests` per client IP per
    `window_seconds` on paths under `prefix`. Other paths are not counted.
    """

    def __init__(self, app, max_requests: int = 200, window_seconds: int = 600, prefix: str = "/api/"):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.prefix = prefix
        # ip -> (window start, count)
        self.windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, client_ip: str, now: float = None) -> bool:
        """Count one request for `client_ip`; False once the window is full."""
        now = time.monotonic() if now is None else now
        with self._lock:
            start, count = self.windows.get(client_ip, (now, 0))
            if now - start >= self.window_seconds:
                start, count = now, 0
            if count >= self.max_requests:
                self.windows[client_ip] = (start, count)
                return False
            self.windows[client_ip] = (start, count + 1)
            self._drop_expired(now)
            return True

    def _drop_expired(self, now: float) -> None:
        expired = [ip for ip, (start, _) in self.windows.items() if now - start >= self.window_seconds]
        for ip in expired:
            del self.windows[ip]

    async def dispatch(self, request: Request, call_next):
        if self.max_requests <= 0 or not request.url.path.startswith(self.prefix):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        if not self.hit(client_ip):
            logger.warning(f"RATE_LIMITED CLIENT={client_ip} PATH={request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": "Too many requests, please try again later."},
            )
        return await call_next(request)
