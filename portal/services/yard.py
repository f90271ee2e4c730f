from typing import List

from portal.client.http import ApiClient
from portal.schemas.base import MessageResponse, parse_list, parse_message
from portal.schemas.yard import YardBlock, YardBlockForm, YardBlockUpdate


class YardService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list_blocks(self) -> List[YardBlock]:
        r = await self.client.get("/yard")
        return parse_list(YardBlock, r.json())

    async def create_block(self, data: YardBlockForm) -> MessageResponse:
        r = await self.client.post("/yard", json=data.to_api())
        return parse_message(r)

    async def update_block(self, block_id: str, data: YardBlockUpdate) -> MessageResponse:
        r = await self.client.put(f"/yard/{block_id}", json=data.to_api())
        return parse_message(r)
