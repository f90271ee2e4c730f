# portal/store/auth.py
import logging
from typing import Any, Dict, Optional

from portal.core.errors import ApiError
from portal.schemas.auth import LoginResponse
from portal.schemas.user import UserRole
from portal.services.auth import AuthService
from portal.store.state import Slice

logger = logging.getLogger(__name__)


def session_user(resp: LoginResponse) -> Dict[str, Any]:
    """The user as kept in the session; the name falls back to the e-mail's local part."""
    u = resp.user
    user = {
        "id": u.id,
        "name": u.name or u.email.split("@")[0],
        "email": u.email,
        "role": u.role,
    }
    if u.profile_image:
        user["profileImage"] = u.profile_image
    return user


class AuthSlice(Slice[Optional[Dict[str, Any]]]):
    name = "auth"

    def __init__(self, client):
        super().__init__(client, initial=None)
        self.service = AuthService(client)
        # restored sessions start logged in
        self.state.data = client.credentials.user
        # e-mail waiting for its signup OTP
        self.pending_signup: Optional[str] = None

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self.state.data

    @property
    def is_authenticated(self) -> bool:
        return bool(self.state.data and self.client.credentials.access_token)

    def _store_login(self, resp: LoginResponse) -> Dict[str, Any]:
        user = session_user(resp)
        self.client.credentials.save_login(resp.access_token, resp.refresh_token, user)
        self.client.set_access_token(resp.access_token)
        self.state.data = user
        logger.info("User %s logged in as %s", user["email"], user["role"])
        return user

    async def login(self, email: str, password: str, role: Optional[UserRole] = None) -> Optional[Dict[str, Any]]:
        resp = await self._run(self.service.login(email, password, role), "Login failed")
        return self._store_login(resp) if resp else None

    async def google_login(self, code: str, role: Optional[UserRole] = None) -> Optional[Dict[str, Any]]:
        resp = await self._run(self.service.google_login(code, role), "Google login failed")
        return self._store_login(resp) if resp else None

    async def initiate_signup(self, email: str) -> bool:
        result = await self._run(self.service.initiate_signup(email), "Failed to send OTP")
        if result is None:
            return False
        self.pending_signup = email
        return True

    async def signup(self, email: str, password: str, name: str, otp: str) -> bool:
        result = await self._run(self.service.signup(email, password, name, otp), "Signup failed")
        if result is None:
            return False
        self.pending_signup = None
        return True

    async def forgot_password(self, email: str) -> bool:
        result = await self._run(self.service.forgot_password(email), "Failed to send reset code")
        return result is not None

    async def verify_reset_otp(self, email: str, otp: str) -> bool:
        result = await self._run(self.service.verify_reset_otp(email, otp), "Invalid or expired OTP")
        return result is not None

    async def reset_password(self, email: str, otp: str, new_password: str) -> bool:
        result = await self._run(self.service.reset_password(email, otp, new_password), "Failed to reset password")
        return result is not None

    async def logout(self) -> None:
        """Logs out upstream, then clears local credentials whatever the outcome."""
        try:
            await self.service.logout()
        except ApiError as e:
            logger.info("Upstream logout failed, clearing session anyway: %s", e.message)
        finally:
            self.client.clear_credentials(full=True)
            self.state.reset()
            self.pending_signup = None

    def reset(self) -> None:
        super().reset()
        self.pending_signup = None
