# portal/schemas/user.py
from typing import Literal, Optional

from pydantic import EmailStr, Field

from portal.schemas.base import APIModel

UserRole = Literal["admin", "operator", "customer"]


class User(APIModel):
    id: str
    name: str = ""
    email: str
    role: UserRole
    organization: Optional[str] = None
    avatar: Optional[str] = None
    is_blocked: bool = False
    phone: Optional[str] = None
    company_name: Optional[str] = None
    profile_image: Optional[str] = None


class UserCreate(APIModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    role: UserRole
    password: str = Field(..., min_length=6)
    organization: Optional[str] = None
    phone: Optional[str] = None
    company_name: Optional[str] = None


# partial update; the password goes through its own endpoint
class UserUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    organization: Optional[str] = None
    phone: Optional[str] = None
    company_name: Optional[str] = None


class BlockToggleUser(APIModel):
    id: str
    is_blocked: bool


class BlockToggleResponse(APIModel):
    user: BlockToggleUser


class UserUpdateResponse(APIModel):
    message: str = ""
    user: User
