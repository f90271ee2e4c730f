# portal/api/v1/endpoints/auth_pages.py
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query, status

from portal.core.config import settings
from portal.core.deps import ensure_ok, get_portal_session, get_sessions
from portal.core.navigation import ROLES, dashboard_path_for
from portal.schemas.auth import (
    EmailRequest,
    GoogleLoginRequest,
    LoginRequest,
    ResetPasswordForm,
    SignupForm,
    SignupRequest,
    VerifyOtpRequest,
)
from portal.schemas.user import UserRole
from portal.services.sessions import PortalSession, SessionManager

router = APIRouter(tags=["auth"])


def _check_role(role: str) -> UserRole:
    if role not in ROLES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return role  # type: ignore[return-value]


def _safe_next(next_path: Optional[str]) -> Optional[str]:
    """Only same-site paths are honoured after login."""
    # browsers treat a backslash like a slash
    if next_path and next_path.startswith("/") and not next_path.startswith("//") and "\\" not in next_path:
        return next_path
    return None


# === Landing ===
@router.get("/", summary="Landing")
async def landing(session: PortalSession = Depends(get_portal_session)):
    user = session.user
    return {
        "app": settings.APP_NAME,
        "user": user,
        "dashboard": dashboard_path_for(user["role"]) if user else None,
        "logins": {r: f"/{r}/login" for r in ROLES},
    }


# === Login (per portal section) ===
@router.get("/{role}/login")
async def login_page(
    role: str,
    next: Optional[str] = Query(None),
    reason: Optional[str] = Query(None),
    session: PortalSession = Depends(get_portal_session),
):
    role = _check_role(role)
    user = session.user
    return {
        "role": role,
        "next": _safe_next(next),
        "reason": reason,
        # already logged in: the page offers a link instead of the form
        "dashboard": dashboard_path_for(user["role"]) if user else None,
    }


@router.post("/{role}/login")
async def login(
    role: str,
    body: LoginRequest,
    next: Optional[str] = Query(None),
    session: PortalSession = Depends(get_portal_session),
    sessions: SessionManager = Depends(get_sessions),
):
    role = _check_role(role)
    auth = session.store.auth
    user = await auth.login(body.email, body.password, body.role or role)
    ensure_ok(auth.state)
    # new id once authenticated; the cookie middleware sends it
    sessions.rotate(session)
    return {"user": user, "redirect": _safe_next(next) or dashboard_path_for(user["role"])}


@router.post("/{role}/login/google")
async def google_login(
    role: str,
    body: GoogleLoginRequest,
    session: PortalSession = Depends(get_portal_session),
    sessions: SessionManager = Depends(get_sessions),
):
    role = _check_role(role)
    auth = session.store.auth
    user = await auth.google_login(body.code, body.role or role)
    ensure_ok(auth.state)
    # new id once authenticated; the cookie middleware sends it
    sessions.rotate(session)
    return {"user": user, "redirect": dashboard_path_for(user["role"])}


# === Customer signup (details, then OTP) ===
@router.post("/customer/signup")
async def signup_details(body: SignupForm, session: PortalSession = Depends(get_portal_session)):
    auth = session.store.auth
    await auth.initiate_signup(body.email)
    ensure_ok(auth.state)
    return {"step": "otp", "email": body.email}


@router.post("/customer/signup/resend-otp")
async def signup_resend_otp(body: EmailRequest, session: PortalSession = Depends(get_portal_session)):
    auth = session.store.auth
    await auth.initiate_signup(body.email)
    ensure_ok(auth.state)
    return {"step": "otp", "email": body.email}


@router.post("/customer/signup/verify")
async def signup_verify(body: SignupRequest, session: PortalSession = Depends(get_portal_session)):
    auth = session.store.auth
    await auth.signup(body.email, body.password, body.name, body.otp)
    ensure_ok(auth.state)
    return {"message": "Account created", "redirect": "/customer/login"}


# === Password reset ===
@router.post("/forgot-password")
async def forgot_password(
    body: EmailRequest,
    role: str = Query("customer"),
    session: PortalSession = Depends(get_portal_session),
):
    role = _check_role(role)
    auth = session.store.auth
    await auth.forgot_password(body.email)
    ensure_ok(auth.state)
    query = urlencode({"email": body.email, "role": role})
    return {"message": "Reset code sent", "redirect": f"/reset-password?{query}"}


@router.post("/verify-reset-otp")
async def verify_reset_otp(body: VerifyOtpRequest, session: PortalSession = Depends(get_portal_session)):
    auth = session.store.auth
    await auth.verify_reset_otp(body.email, body.otp)
    ensure_ok(auth.state)
    return {"verified": True}


@router.post("/reset-password")
async def reset_password(body: ResetPasswordForm, session: PortalSession = Depends(get_portal_session)):
    auth = session.store.auth
    await auth.reset_password(body.email, body.otp, body.new_password)
    ensure_ok(auth.state)
    return {"message": "Password reset", "redirect": f"/{body.role}/login"}


# === Logout / unauthorized ===
@router.post("/logout")
async def logout(session: PortalSession = Depends(get_portal_session)):
    await session.store.auth.logout()
    session.store.reset()
    return {"redirect": "/"}


@router.get("/unauthorized")
async def unauthorized(session: PortalSession = Depends(get_portal_session)):
    user = session.user
    return {
        "detail": "You do not have access to this page.",
        "dashboard": dashboard_path_for(user["role"]) if user else "/",
    }
