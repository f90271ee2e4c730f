# portal/store/yard.py
from typing import List, Optional

from portal.schemas.base import MessageResponse
from portal.schemas.yard import YardBlock, YardBlockForm, YardBlockUpdate
from portal.services.yard import YardService
from portal.store.state import Slice


class YardSlice(Slice[List[YardBlock]]):
    name = "yard"

    def __init__(self, client):
        super().__init__(client, initial=[])
        self.service = YardService(client)

    @property
    def blocks(self) -> List[YardBlock]:
        return self.state.data or []

    async def fetch_blocks(self) -> Optional[List[YardBlock]]:
        found = await self._run(self.service.list_blocks(), "Failed to fetch blocks")
        if found is not None:
            self.state.data = found
        return found

    async def create_block(self, data: YardBlockForm) -> Optional[MessageResponse]:
        resp = await self._run(self.service.create_block(data), "Failed to create block")
        if resp is not None:
            await self.fetch_blocks()
        return resp

    async def update_block(self, block_id: str, data: YardBlockUpdate) -> Optional[MessageResponse]:
        resp = await self._run(self.service.update_block(block_id, data), "Failed to update block")
        if resp is not None:
            changes = data.model_dump(exclude_none=True)
            self.state.data = [
                b.model_copy(update=changes) if b.id == block_id else b for b in self.blocks
            ]
        return resp
