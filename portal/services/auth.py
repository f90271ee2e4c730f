# portal/services/auth.py
from typing import Any, Dict, Optional

from portal.client.http import ApiClient
from portal.schemas.auth import (
    EmailRequest,
    GoogleLoginRequest,
    LoginRequest,
    LoginResponse,
    ResetPasswordRequest,
    SignupRequest,
    VerifyOtpRequest,
)
from portal.schemas.user import UserRole


def _body(r) -> Dict[str, Any]:
    return r.json() if r.content else {}


class AuthService:
    """Login, signup and password flows. None of these touch the credential
    store; the auth slice decides what gets persisted."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def login(self, email: str, password: str, role: Optional[UserRole] = None) -> LoginResponse:
        body = LoginRequest(email=email, password=password, role=role).to_api()
        r = await self.client.post("/auth/login", json=body)
        return LoginResponse.model_validate(r.json())

    async def google_login(self, code: str, role: Optional[UserRole] = None) -> LoginResponse:
        body = GoogleLoginRequest(code=code, role=role).to_api()
        r = await self.client.post("/auth/google", json=body)
        return LoginResponse.model_validate(r.json())

    async def initiate_signup(self, email: str) -> Dict[str, Any]:
        r = await self.client.post("/auth/initiate-signup", json=EmailRequest(email=email).to_api())
        return _body(r)

    async def signup(self, email: str, password: str, name: str, otp: str) -> Dict[str, Any]:
        body = SignupRequest(email=email, password=password, name=name, otp=otp).to_api()
        r = await self.client.post("/auth/signup", json=body)
        return _body(r)

    async def logout(self) -> Dict[str, Any]:
        r = await self.client.post("/auth/logout")
        return _body(r)

    async def forgot_password(self, email: str) -> Dict[str, Any]:
        r = await self.client.post("/auth/forgot-password", json=EmailRequest(email=email).to_api())
        return _body(r)

    async def reset_password(self, email: str, otp: str, new_password: str) -> Dict[str, Any]:
        body = ResetPasswordRequest(email=email, otp=otp, new_password=new_password).to_api()
        r = await self.client.post("/auth/reset-password", json=body)
        return _body(r)

    async def verify_reset_otp(self, email: str, otp: str) -> Dict[str, Any]:
        r = await self.client.post("/auth/verify-reset-otp", json=VerifyOtpRequest(email=email, otp=otp).to_api())
        return _body(r)
