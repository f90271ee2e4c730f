from typing import Optional

from pydantic import EmailStr, Field, model_validator

from portal.schemas.base import APIModel
from portal.schemas.user import UserRole


class LoginRequest(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: Optional[UserRole] = None


class GoogleLoginRequest(APIModel):
    code: str = Field(..., min_length=1)
    role: Optional[UserRole] = None


class LoginUser(APIModel):
    id: str
    email: str
    role: UserRole
    name: Optional[str] = None
    profile_image: Optional[str] = None
    is_blocked: bool = False


class LoginResponse(APIModel):
    access_token: str
    refresh_token: Optional[str] = None
    user: LoginUser


class EmailRequest(APIModel):
    email: EmailStr


class SignupForm(APIModel):
    """First signup step; the OTP is requested once this validates."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def _passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class SignupRequest(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    otp: str = Field(..., min_length=1)


class VerifyOtpRequest(APIModel):
    email: EmailStr
    otp: str = Field(..., min_length=1)


class ResetPasswordForm(APIModel):
    email: EmailStr
    otp: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
    confirm_password: str
    role: UserRole = "customer"

    @model_validator(mode="after")
    def _passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ResetPasswordRequest(APIModel):
    email: EmailStr
    otp: str
    new_password: str
