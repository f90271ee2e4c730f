# portal/store/profile.py
from typing import Optional

from portal.schemas.base import MessageResponse
from portal.schemas.profile import PasswordUpdate, Profile, ProfileUpdate
from portal.services.profile import ProfileService
from portal.store.state import Slice


class ProfileSlice(Slice[Optional[Profile]]):
    name = "profile"

    def __init__(self, client):
        super().__init__(client, initial=None)
        self.service = ProfileService(client)

    @property
    def profile(self) -> Optional[Profile]:
        return self.state.data

    async def get(self) -> Optional[Profile]:
        found = await self._run(self.service.get(), "Failed to fetch profile")
        if found is not None:
            self.state.data = found
        return found

    async def update(self, data: ProfileUpdate) -> Optional[Profile]:
        resp = await self._run(self.service.update(data), "Failed to update profile")
        if resp is None:
            return None
        if self.profile is None:
            self.state.data = resp.user
        else:
            changes = resp.user.model_dump(exclude_unset=True)
            self.state.data = self.profile.model_copy(update=changes)
        self._sync_session_user()
        return self.state.data

    async def update_password(self, data: PasswordUpdate) -> Optional[MessageResponse]:
        return await self._run(self.service.update_password(data), "Failed to update password")

    async def update_image(
        self, filename: str, content: bytes, content_type: Optional[str] = None
    ) -> Optional[str]:
        resp = await self._run(
            self.service.update_image(filename, content, content_type), "Failed to upload image"
        )
        if resp is None:
            return None
        if self.profile is not None:
            self.profile.profile_image = resp.profile_image
        self._sync_session_user()
        return resp.profile_image

    def _sync_session_user(self) -> None:
        # the header shows name and avatar from the session user
        creds = self.client.credentials
        if creds.user is None or self.profile is None:
            return
        user = dict(creds.user)
        if self.profile.name:
            user["name"] = self.profile.name
        if self.profile.profile_image:
            user["profileImage"] = self.profile.profile_image
        creds.set_user(user)

    def clear_profile(self) -> None:
        self.reset()
