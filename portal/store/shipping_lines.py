from typing import List, Optional

from portal.schemas.base import MessageResponse
from portal.schemas.shipping_line import ShippingLine, ShippingLineForm, ShippingLineUpdate
from portal.services.shipping_lines import ShippingLineService
from portal.store.state import Slice


class ShippingLineSlice(Slice[List[ShippingLine]]):
    name = "shipping_line"

    def __init__(self, client):
        super().__init__(client, initial=[])
        self.service = ShippingLineService(client)

    @property
    def lines(self) -> List[ShippingLine]:
        return self.state.data or []

    async def fetch_all(self) -> Optional[List[ShippingLine]]:
        found = await self._run(self.service.list(), "Failed to fetch shipping lines")
        if found is not None:
            self.state.data = found
        return found

    async def create(self, data: ShippingLineForm) -> Optional[MessageResponse]:
        resp = await self._run(self.service.create(data), "Failed to create shipping line")
        if resp is not None:
            await self.fetch_all()
        return resp

    async def update(self, line_id: str, data: ShippingLineUpdate) -> Optional[MessageResponse]:
        resp = await self._run(self.service.update(line_id, data), "Failed to update shipping line")
        if resp is not None:
            await self.fetch_all()
        return resp
