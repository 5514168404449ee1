"""
Request logging middleware.
Logs one line per API request and tags every response with a request ID and its processing time.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware logging `METHOD path status in Nms` for API requests.
    """

    def __init__(self, app: ASGIApp, path_prefix: str = "/api"):
        super().__init__(app)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request through the logging middleware.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response object with X-Request-ID and X-Process-Time headers
        """
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request error [{request_id}]: {request.method} {request.url.path} "
                f"{type(exc).__name__} after {duration_ms:.0f}ms",
                extra={"request_id": request_id, "path": request.url.path, "method": request.method}
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if request.url.path.startswith(self.path_prefix):
            logger.info(f"{request.method} {request.url.path} {response.status_code} in {duration_ms:.0f}ms")

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{duration_ms:.0f}ms"
        return response
