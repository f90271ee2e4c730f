from typing import List

from portal.client.http import ApiClient
from portal.schemas.base import MessageResponse, parse_list, parse_message
from portal.schemas.user import BlockToggleResponse, User, UserCreate, UserUpdate, UserUpdateResponse


class AdminService:
    """User administration."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def list_users(self) -> List[User]:
        r = await self.client.get("/users")
        return parse_list(User, r.json())

    async def toggle_user_block(self, user_id: str) -> BlockToggleResponse:
        r = await self.client.patch(f"/users/{user_id}/block")
        return BlockToggleResponse.model_validate(r.json())

    async def create_user(self, data: UserCreate) -> MessageResponse:
        r = await self.client.post("/users", json=data.to_api())
        return parse_message(r)

    async def update_user(self, user_id: str, data: UserUpdate) -> UserUpdateResponse:
        r = await self.client.put(f"/users/{user_id}", json=data.to_api())
        return UserUpdateResponse.model_validate(r.json())
