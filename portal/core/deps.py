# portal/core/deps.py
from urllib.parse import urlencode

from fastapi import Depends, HTTPException, Request

from portal.core.config import settings
from portal.core.errors import RedirectRequired, page_status_for
from portal.core.navigation import dashboard_path_for, login_path_for
from portal.schemas.user import UserRole
from portal.services.sessions import PortalSession, SessionManager
from portal.store.state import ResourceState
from portal.store.store import Store


def get_sessions(request: Request) -> SessionManager:
    return request.app.state.sessions


async def get_portal_session(
    request: Request,
    sessions: SessionManager = Depends(get_sessions),
) -> PortalSession:
    """
    The caller's session, created on first contact.
    The session cookie is written by the middleware in main.py when the id changes.
    """
    sid = request.cookies.get(settings.SESSION_COOKIE_NAME)
    session = sessions.get_or_create(sid)
    request.state.portal_session = session
    return session


async def get_store(session: PortalSession = Depends(get_portal_session)) -> Store:
    return session.store


def require_role(role: UserRole):
    """
    Route guard for one portal section:
      1. no user or no access token -> that section's login page, with ``next``
      2. logged in with another role -> the user's own dashboard
    """

    async def guard(
        request: Request,
        session: PortalSession = Depends(get_portal_session),
    ) -> PortalSession:
        user = session.user
        if not user or not session.credentials.access_token:
            path = request.url.path
            raise RedirectRequired(f"{login_path_for(path)}?{urlencode({'next': path})}")
        if user.get("role") != role:
            raise RedirectRequired(dashboard_path_for(user.get("role", "")))
        return session

    return guard


def ensure_ok(state: ResourceState) -> None:
    """Turn a slice failure into an HTTP error for the page."""
    if state.error is None:
        return
    raise HTTPException(status_code=page_status_for(state.error_code), detail=state.error)
