# portal/core/errors.py
import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from portal.core.navigation import login_path_for

log = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class ApiError(Exception):
    """A failed upstream request.

    ``message`` is what the user sees: the server's own ``message`` when the
    response carried one, otherwise a generic fallback. ``server_message``
    keeps only the former so slices can substitute their own fallback text.
    ``status_code`` is None when the request never got a response.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.server_message = server_message
        self.path = path

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


class AuthenticationError(ApiError):
    """A 401 that will not be retried: bad credentials or an already-retried request."""


class SessionExpiredError(AuthenticationError):
    """The refresh call failed; the session is over and credentials are cleared."""


class RedirectRequired(Exception):
    """Raised by route guards; answered with a 303 to ``location``."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


def page_status_for(status_code: Optional[int]) -> int:
    # upstream client errors pass through, everything else is a bad gateway
    if status_code is not None and 400 <= status_code < 500:
        return status_code
    return 502


def validation_payload(exc: ValidationError) -> dict:
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return {"detail": "Validation error", "errors": errors}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(ValidationError)
    async def form_validation_handler(request: Request, exc: ValidationError):
        # form schemas validated by hand inside page handlers
        return JSONResponse(status_code=422, content=validation_payload(exc))

    @app.exception_handler(RedirectRequired)
    async def redirect_handler(request: Request, exc: RedirectRequired):
        return RedirectResponse(exc.location, status_code=303)

    @app.exception_handler(SessionExpiredError)
    async def session_expired_handler(request: Request, exc: SessionExpiredError):
        session = getattr(request.state, "portal_session", None)
        if session is not None:
            session.store.reset()
        log.info("Session expired, redirecting to login: %s", exc.message)
        query = urlencode({"next": request.url.path, "reason": "session-expired"})
        return RedirectResponse(f"{login_path_for(request.url.path)}?{query}", status_code=303)

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError):
        return JSONResponse(status_code=401, content={"detail": exc.message})

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        log.warning("Upstream request failed (%s): %s", exc.status_code, exc.message)
        return JSONResponse(
            status_code=page_status_for(exc.status_code),
            content={"detail": exc.message or GENERIC_ERROR_MESSAGE},
        )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        resp = await call_next(request)
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        return resp
