from typing import Optional

from pydantic import Field, model_validator

from portal.schemas.base import APIModel


class Profile(APIModel):
    id: str
    email: str
    role: str
    name: Optional[str] = None
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    company_name: Optional[str] = None


class ProfileUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    company_name: Optional[str] = None


class PasswordUpdate(APIModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def _passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ProfileUpdateResponse(APIModel):
    message: str = ""
    user: Profile


class ProfileImageResponse(APIModel):
    profile_image: str
