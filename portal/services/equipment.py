from typing import List, Optional

from portal.client.http import ApiClient
from portal.schemas.base import MessageResponse, parse_list, parse_message
from portal.schemas.equipment import Equipment, EquipmentFilters, EquipmentForm, EquipmentUpdate


class EquipmentService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self, filters: Optional[EquipmentFilters] = None) -> List[Equipment]:
        params = filters.to_api() if filters else None
        r = await self.client.get("/equipment", params=params)
        return parse_list(Equipment, r.json())

    async def add(self, data: EquipmentForm) -> MessageResponse:
        r = await self.client.post("/equipment", json=data.to_api())
        return parse_message(r)

    async def update(self, equipment_id: str, data: EquipmentUpdate) -> MessageResponse:
        r = await self.client.put(f"/equipment/{equipment_id}", json=data.to_api())
        return parse_message(r)

    async def delete(self, equipment_id: str) -> MessageResponse:
        r = await self.client.delete(f"/equipment/{equipment_id}")
        return parse_message(r)
