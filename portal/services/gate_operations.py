# portal/services/gate_operations.py
from typing import Any, Dict, List, Optional

from portal.client.http import ApiClient
from portal.schemas.base import parse_list
from portal.schemas.container import INSIDE_TERMINAL_STATUSES
from portal.schemas.gate import GateOperation, GateOperationCreate, GateOperationFilters, GateOutForm
from portal.services.containers import ContainerService
from portal.services.vehicles import VehicleService


class GateCheckError(Exception):
    """A gate-out that must not be submitted; ``field`` names the form input to flag."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class GateOperationService:
    def __init__(self, client: ApiClient):
        self.client = client
        self.containers = ContainerService(client)
        self.vehicles = VehicleService(client)

    async def list(self, filters: Optional[GateOperationFilters] = None) -> List[GateOperation]:
        params = filters.to_api() if filters else None
        r = await self.client.get("/gate-operations", params=params)
        return parse_list(GateOperation, r.json())

    async def create(self, data: GateOperationCreate) -> Dict[str, Any]:
        r = await self.client.post("/gate-operations", json=data.to_api())
        return r.json()

    async def verify_gate_out(self, form: GateOutForm) -> None:
        """Only a container inside the terminal, on a vehicle that is in the
        yard, may leave. Raises GateCheckError otherwise."""
        if form.container_number:
            container = await self.containers.find_by_number(form.container_number)
            if container is None:
                raise GateCheckError("containerNumber", "Container not found in system.")
            if container.status not in INSIDE_TERMINAL_STATUSES:
                raise GateCheckError(
                    "containerNumber",
                    f"Container status is '{container.status}'. "
                    "Only containers currently inside terminal can Gate-Out.",
                )

        vehicle = await self.vehicles.find_by_number(form.vehicle_number)
        if vehicle is None:
            raise GateCheckError("vehicleNumber", "Vehicle not found in system.")
        if vehicle.status != "in-yard":
            raise GateCheckError(
                "vehicleNumber",
                f"Vehicle status is '{vehicle.status}'. Only vehicles currently In-Yard can Gate-Out.",
            )
