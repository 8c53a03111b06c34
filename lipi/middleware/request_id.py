import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs its latency."""

    async def dispatch(self, request, call_next):
        rid = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        request.state.request_id = rid
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logging.exception("[REQUEST] request_id=%s path=%s error", rid, request.url.path)
            raise
        elapsed = (time.perf_counter() - start) * 1000
        logging.info(
            "[REQUEST] request_id=%s path=%s status=%s latency_ms=%.2f",
            rid,
            request.url.path,
            response.status_code,
            elapsed,
        )
        response.headers["X-Request-Id"] = rid
        return response
