# portal/main.py
import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from portal.core.config import settings
from portal.core.logging import setup_logging
from portal.core.errors import register_error_handlers
from portal.api.v1.router import api_router
from portal.services.scheduler import lifespan_scheduler  # lifespan (session cleanup)
from portal.services.sessions import SessionManager

# Monitoring
import sentry_sdk
from prometheus_fastapi_instrumentator import Instrumentator

logger = setup_logging(settings.LOG_LEVEL)
log = logging.getLogger(__name__)


def create_app(transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    ``transport`` replaces the network for every session's upstream client
    (tests pass an httpx.MockTransport).
    """
    # lifespan runs APScheduler (idle session cleanup) and closes clients on shutdown
    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan_scheduler,
    )
    app.state.sessions = SessionManager(settings, transport=transport)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---- Sentry (skipped when SENTRY_DSN is unset) ----
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            environment=settings.SENTRY_ENV or settings.ENV,
        )

    # ---- Prometheus /metrics ----
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

    # error handlers + security headers
    register_error_handlers(app)

    @app.middleware("http")
    async def session_cookie(request: Request, call_next):
        resp = await call_next(request)
        session = getattr(request.state, "portal_session", None)
        if session is not None and request.cookies.get(settings.SESSION_COOKIE_NAME) != session.id:
            resp.set_cookie(
                settings.SESSION_COOKIE_NAME,
                session.id,
                max_age=settings.SESSION_IDLE_MINUTES * 60,
                httponly=True,
                samesite="lax",
                secure=settings.SESSION_COOKIE_SECURE,
            )
        return resp

    # === Pages ===
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/healthz", tags=["ops"])
    async def healthz():
        return {"ok": True}

    @app.get("/readyz", tags=["ops"])
    async def readyz():
        return {"ready": True, "sessions": len(app.state.sessions)}

    log.info("Application initialized (env=%s, upstream=%s)", settings.ENV, settings.API_BASE_URL)
    return app


# Uvicorn entry point
app = create_app()
