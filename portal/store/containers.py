# portal/store/containers.py
from typing import List, Optional

from portal.schemas.base import MessageResponse
from portal.schemas.container import (
    Container,
    ContainerFilters,
    ContainerForm,
    ContainerHistory,
    ContainerUpdate,
)
from portal.services.containers import ContainerService
from portal.store.state import Slice


class ContainerSlice(Slice[List[Container]]):
    """Container list plus the container opened on a details page."""

    name = "container"

    def __init__(self, client):
        super().__init__(client, initial=[])
        self.service = ContainerService(client)
        self.current: Optional[Container] = None
        self.history: List[ContainerHistory] = []
        self._filters: Optional[ContainerFilters] = None

    @property
    def containers(self) -> List[Container]:
        return self.state.data or []

    async def fetch_all(self, filters: Optional[ContainerFilters] = None) -> Optional[List[Container]]:
        self._filters = filters
        found = await self._run(self.service.list(filters), "Failed to fetch containers")
        if found is not None:
            self.state.data = found
        return found

    async def fetch_by_id(self, container_id: str) -> Optional[Container]:
        found = await self._run(self.service.get(container_id), "Failed to fetch container")
        if found is not None:
            self.current = found
        return found

    async def create(self, data: ContainerForm) -> Optional[MessageResponse]:
        resp = await self._run(self.service.create(data), "Failed to create container")
        if resp is not None:
            await self.fetch_all(self._filters)
        return resp

    async def update(self, container_id: str, data: ContainerUpdate) -> Optional[MessageResponse]:
        resp = await self._run(self.service.update(container_id, data), "Failed to update container")
        if resp is not None:
            await self.fetch_by_id(container_id)
        return resp

    async def blacklist(self, container_id: str) -> Optional[MessageResponse]:
        resp = await self._run(self.service.blacklist(container_id), "Failed to blacklist container")
        if resp is not None:
            self._set_blacklisted(container_id, True)
        return resp

    async def unblacklist(self, container_id: str) -> Optional[MessageResponse]:
        resp = await self._run(self.service.unblacklist(container_id), "Failed to unblacklist container")
        if resp is not None:
            self._set_blacklisted(container_id, False)
        return resp

    async def fetch_history(self, container_id: str) -> Optional[List[ContainerHistory]]:
        entries = await self._run(self.service.history(container_id), "Failed to fetch container history")
        if entries is not None:
            self.history = entries
        return entries

    def _set_blacklisted(self, container_id: str, flag: bool) -> None:
        for c in self.containers:
            if c.id == container_id:
                c.blacklisted = flag
        if self.current is not None and self.current.id == container_id:
            self.current.blacklisted = flag

    def clear_current(self) -> None:
        self.current = None
        self.history = []

    def reset(self) -> None:
        super().reset()
        self.clear_current()
        self._filters = None
