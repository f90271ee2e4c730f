# portal/store/fleet.py
"""Vehicles and yard equipment: same lifecycle, separate slices."""
from typing import Dict, List, Optional

from portal.schemas.base import MessageResponse
from portal.schemas.equipment import Equipment, EquipmentFilters, EquipmentForm, EquipmentUpdate
from portal.schemas.vehicle import Vehicle, VehicleFilters, VehicleForm, VehicleUpdate
from portal.services.equipment import EquipmentService
from portal.services.vehicles import VehicleService
from portal.store.state import Slice


def fleet_counts(vehicles: List[Vehicle], equipment: List[Equipment]) -> Dict[str, int]:
    """Header counters of the vehicles & equipment pages."""
    return {
        "vehiclesInYard": sum(1 for v in vehicles if v.status == "in-yard"),
        "vehiclesOutOfYard": sum(1 for v in vehicles if v.status == "out-of-yard"),
        "operationalEquipment": sum(1 for e in equipment if e.status == "operational"),
    }


class VehicleSlice(Slice[List[Vehicle]]):
    name = "vehicle"

    def __init__(self, client):
        super().__init__(client, initial=[])
        self.service = VehicleService(client)

    @property
    def vehicles(self) -> List[Vehicle]:
        return self.state.data or []

    async def fetch_all(self, filters: Optional[VehicleFilters] = None) -> Optional[List[Vehicle]]:
        found = await self._run(self.service.list(filters), "Failed to fetch vehicles")
        if found is not None:
            self.state.data = found
        return found

    async def add(self, data: VehicleForm) -> Optional[MessageResponse]:
        resp = await self._run(self.service.add(data), "Failed to add vehicle")
        if resp is not None:
            await self.fetch_all()
        return resp

    async def update(self, vehicle_id: str, data: VehicleUpdate) -> Optional[MessageResponse]:
        resp = await self._run(self.service.update(vehicle_id, data), "Failed to update vehicle")
        if resp is not None:
            await self.fetch_all()
        return resp

    async def delete(self, vehicle_id: str) -> Optional[MessageResponse]:
        resp = await self._run(self.service.delete(vehicle_id), "Failed to delete vehicle")
        if resp is not None:
            await self.fetch_all()
        return resp


class EquipmentSlice(Slice[List[Equipment]]):
    name = "equipment"

    def __init__(self, client):
        super().__init__(client, initial=[])
        self.service = EquipmentService(client)

    @property
    def equipment(self) -> List[Equipment]:
        return self.state.data or []

    async def fetch_all(self, filters: Optional[EquipmentFilters] = None) -> Optional[List[Equipment]]:
        found = await self._run(self.service.list(filters), "Failed to fetch equipment")
        if found is not None:
            self.state.data = found
        return found

    async def add(self, data: EquipmentForm) -> Optional[MessageResponse]:
        resp = await self._run(self.service.add(data), "Failed to add equipment")
        if resp is not None:
            await self.fetch_all()
        return resp

    async def update(self, equipment_id: str, data: EquipmentUpdate) -> Optional[MessageResponse]:
        resp = await self._run(self.service.update(equipment_id, data), "Failed to update equipment")
        if resp is not None:
            await self.fetch_all()
        return resp

    async def delete(self, equipment_id: str) -> Optional[MessageResponse]:
        resp = await self._run(self.service.delete(equipment_id), "Failed to delete equipment")
        if resp is not None:
            await self.fetch_all()
        return resp
