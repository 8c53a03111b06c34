import logging
from fastapi import FastAPI
from lipi.api import routes
from lipi.core.config import settings
from lipi.core.logging import configure_logging
from lipi.middleware.request_id import RequestIDMiddleware
from lipi.middleware.auth import AuthMiddleware


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Lipi transliteration", version="1.0.0")

    # Starlette runs the last added middleware first: request id, then auth
    app.add_middleware(AuthMiddleware, rate_limit_per_min=settings.RATE_LIMIT_PER_MIN)
    app.add_middleware(RequestIDMiddleware)

    logging.info(
        "transliteration_backend backend=%s preferences_path_present=%s",
        routes.engine.backend,
        bool(settings.PREFERENCES_PATH),
    )

    app.include_router(routes.router, prefix="/api/v1")
    return app


app = create_app()
