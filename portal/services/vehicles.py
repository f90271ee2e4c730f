from typing import List, Optional

from portal.client.http import ApiClient
from portal.schemas.base import MessageResponse, parse_list, parse_message
from portal.schemas.vehicle import Vehicle, VehicleFilters, VehicleForm, VehicleUpdate


class VehicleService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self, filters: Optional[VehicleFilters] = None) -> List[Vehicle]:
        params = filters.to_api() if filters else None
        r = await self.client.get("/vehicles", params=params)
        return parse_list(Vehicle, r.json())

    async def find_by_number(self, vehicle_number: str) -> Optional[Vehicle]:
        found = await self.list(VehicleFilters(vehicle_number=vehicle_number))
        return found[0] if found else None

    async def add(self, data: VehicleForm) -> MessageResponse:
        r = await self.client.post("/vehicles", json=data.to_api())
        return parse_message(r)

    async def update(self, vehicle_id: str, data: VehicleUpdate) -> MessageResponse:
        r = await self.client.put(f"/vehicles/{vehicle_id}", json=data.to_api())
        return parse_message(r)

    async def delete(self, vehicle_id: str) -> MessageResponse:
        r = await self.client.delete(f"/vehicles/{vehicle_id}")
        return parse_message(r)
