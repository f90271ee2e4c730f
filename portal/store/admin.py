from typing import List, Optional

from portal.schemas.base import MessageResponse
from portal.schemas.user import BlockToggleResponse, User, UserCreate, UserUpdate, UserUpdateResponse
from portal.services.admin import AdminService
from portal.store.state import Slice


class AdminSlice(Slice[List[User]]):
    name = "admin"

    def __init__(self, client):
        super().__init__(client, initial=[])
        self.service = AdminService(client)

    @property
    def users(self) -> List[User]:
        return self.state.data or []

    async def fetch_all_users(self) -> Optional[List[User]]:
        found = await self._run(self.service.list_users(), "Failed to fetch users")
        if found is not None:
            self.state.data = found
        return found

    async def toggle_user_block(self, user_id: str) -> Optional[BlockToggleResponse]:
        resp = await self._run(self.service.toggle_user_block(user_id), "Failed to toggle block status")
        if resp is not None:
            for u in self.users:
                if u.id == resp.user.id:
                    u.is_blocked = resp.user.is_blocked
        return resp

    async def create_user(self, data: UserCreate) -> Optional[MessageResponse]:
        resp = await self._run(self.service.create_user(data), "Failed to create user")
        if resp is not None:
            await self.fetch_all_users()
        return resp

    async def update_user(self, user_id: str, data: UserUpdate) -> Optional[UserUpdateResponse]:
        resp = await self._run(self.service.update_user(user_id, data), "Failed to update user")
        if resp is not None:
            changes = resp.user.model_dump(exclude_unset=True)
            self.state.data = [
                u.model_copy(update=changes) if u.id == resp.user.id else u for u in self.users
            ]
        return resp
