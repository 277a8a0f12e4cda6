# landing_api/main.py
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from landing_api.core.config import Settings, load_settings
from landing_api.core.errors import register_exception_handlers
from landing_api.core.logging import configure_logging
from landing_api.core.middleware import (
    BodySizeLimitMiddleware,
    OriginGateMiddleware,
    RequestLogMiddleware,
    SecurityHeadersMiddleware,
)
from landing_api.core.ratelimit import RateLimiter, RateLimitMiddleware
from landing_api.db.session import build_engine, build_session_factory, init_db

# Routers
from landing_api.api.health import router as health_router
from landing_api.api.inquiries import router as inquiries_router
from landing_api.api.analytics import router as analytics_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings

    # Storage: one engine for the process lifetime
    engine = build_engine(settings.DB_PATH)
    init_db(engine)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Middleware (last added runs first)
    limiter = RateLimiter(settings.RATE_LIMIT_MAX, settings.RATE_LIMIT_WINDOW_SECONDS)
    app.state.rate_limiter = limiter
    app.add_middleware(RateLimitMiddleware, limiter=limiter, trust_proxy=settings.TRUST_PROXY)
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_BODY_BYTES)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.ALLOWED_ORIGIN] if settings.ALLOWED_ORIGIN else ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-API-Key"],
        expose_headers=["Content-Disposition"],
    )
    app.add_middleware(OriginGateMiddleware, allowed_origin=settings.ALLOWED_ORIGIN)
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    # Routers
    app.include_router(health_router, prefix="/api")
    app.include_router(inquiries_router, prefix="/api")
    app.include_router(analytics_router, prefix="/api")

    if not settings.API_KEY:
        logger.warning("API_KEY is not set; admin routes will answer 500")

    return app


def main() -> None:
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
