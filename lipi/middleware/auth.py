import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from lipi.core import config
from lipi.core.security import verify_api_key
from lipi.core.rate_limit import RateLimiter

PUBLIC_SUFFIXES = ("/health", "/docs", "/openapi.json")


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Identifies the calling client. The client id also scopes the reader
    preferences, so every non-public request must carry it.
    """

    def __init__(self, app, rate_limit_per_min: int):
        super().__init__(app)
        self.rate_limiter = RateLimiter(max_per_minute=rate_limit_per_min)

    async def dispatch(self, request, call_next):
        if request.url.path.endswith(PUBLIC_SUFFIXES):
            return await call_next(request)

        client_id = request.headers.get("X-Client-Id")
        api_key = request.headers.get("X-API-Key")
        rid = getattr(request.state, "request_id", "n/a")

        if not client_id or not api_key:
            logging.error("Auth fail: missing headers", extra={"rid": rid, "client_id": client_id})
            return JSONResponse({"detail": "Unauthorized"}, status_code=401)

        if client_id not in config.settings.CLIENT_REGISTRY:
            logging.error("Auth fail: client not found", extra={"rid": rid, "client_id": client_id})
            return JSONResponse({"detail": "Unauthorized"}, status_code=401)

        if not verify_api_key(client_id, api_key):
            logging.error("Auth fail: key mismatch", extra={"rid": rid, "client_id": client_id})
            return JSONResponse({"detail": "Unauthorized"}, status_code=401)

        if not self.rate_limiter.allow(client_id):
            logging.warning("rate_limited request_id=%s client_id=%s", rid, client_id)
            return JSONResponse(
                {"detail": "Rate limit exceeded"},
                status_code=429,
                headers={"X-RateLimit-Remaining": "0"},
            )

        request.state.client_id = client_id
        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(self.rate_limiter.remaining(client_id))
        return response
