# portal/services/profile.py
from typing import Optional

from portal.client.http import ApiClient
from portal.schemas.base import MessageResponse, parse_message
from portal.schemas.profile import (
    PasswordUpdate,
    Profile,
    ProfileImageResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
)


class ProfileService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get(self) -> Profile:
        r = await self.client.get("/users/profile")
        return Profile.model_validate(r.json())

    async def update(self, data: ProfileUpdate) -> ProfileUpdateResponse:
        r = await self.client.put("/users/profile", json=data.to_api())
        return ProfileUpdateResponse.model_validate(r.json())

    async def update_password(self, data: PasswordUpdate) -> MessageResponse:
        r = await self.client.put("/users/password", json=data.to_api())
        return parse_message(r)

    async def update_image(
        self, filename: str, content: bytes, content_type: Optional[str] = None
    ) -> ProfileImageResponse:
        # multipart; httpx sets the boundary header itself
        files = {"image": (filename, content, content_type or "application/octet-stream")}
        r = await self.client.post("/users/profile/image", files=files)
        return ProfileImageResponse.model_validate(r.json())
