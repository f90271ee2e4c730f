from typing import List

from portal.client.http import ApiClient
from portal.schemas.base import MessageResponse, parse_list, parse_message
from portal.schemas.shipping_line import ShippingLine, ShippingLineForm, ShippingLineUpdate


class ShippingLineService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self) -> List[ShippingLine]:
        r = await self.client.get("/shipping-lines")
        return parse_list(ShippingLine, r.json())

    async def create(self, data: ShippingLineForm) -> MessageResponse:
        r = await self.client.post("/shipping-lines", json=data.to_api())
        return parse_message(r)

    async def update(self, line_id: str, data: ShippingLineUpdate) -> MessageResponse:
        r = await self.client.put(f"/shipping-lines/{line_id}", json=data.to_api())
        return parse_message(r)
