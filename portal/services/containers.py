# portal/services/containers.py
from typing import List, Optional

from portal.client.http import ApiClient
from portal.schemas.base import MessageResponse, parse_list, parse_message
from portal.schemas.container import (
    Container,
    ContainerFilters,
    ContainerForm,
    ContainerHistory,
    ContainerUpdate,
)


class ContainerService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self, filters: Optional[ContainerFilters] = None) -> List[Container]:
        params = filters.to_api() if filters else None
        r = await self.client.get("/containers", params=params)
        return parse_list(Container, r.json())

    async def get(self, container_id: str) -> Container:
        r = await self.client.get(f"/containers/{container_id}")
        return Container.model_validate(r.json())

    async def find_by_number(self, container_number: str) -> Optional[Container]:
        """First match of a number lookup, or None."""
        found = await self.list(ContainerFilters(container_number=container_number))
        return found[0] if found else None

    async def create(self, data: ContainerForm) -> MessageResponse:
        r = await self.client.post("/containers", json=data.to_api())
        return parse_message(r)

    async def update(self, container_id: str, data: ContainerUpdate) -> MessageResponse:
        r = await self.client.put(f"/containers/{container_id}", json=data.to_api())
        return parse_message(r)

    async def blacklist(self, container_id: str) -> MessageResponse:
        r = await self.client.patch(f"/containers/{container_id}/blacklist")
        return parse_message(r)

    async def unblacklist(self, container_id: str) -> MessageResponse:
        r = await self.client.patch(f"/containers/{container_id}/unblacklist")
        return parse_message(r)

    async def history(self, container_id: str) -> List[ContainerHistory]:
        r = await self.client.get(f"/containers/{container_id}/history")
        return parse_list(ContainerHistory, r.json())
