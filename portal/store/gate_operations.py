# portal/store/gate_operations.py
from typing import Any, Dict, List, Optional

from portal.schemas.gate import GateOperation, GateOperationCreate, GateOperationFilters
from portal.services.gate_operations import GateOperationService
from portal.store.state import Slice


class GateOperationSlice(Slice[List[GateOperation]]):
    name = "gate_operation"

    def __init__(self, client):
        super().__init__(client, initial=[])
        self.service = GateOperationService(client)

    @property
    def operations(self) -> List[GateOperation]:
        return self.state.data or []

    async def fetch_all(self, filters: Optional[GateOperationFilters] = None) -> Optional[List[GateOperation]]:
        found = await self._run(self.service.list(filters), "Failed to fetch gate operations")
        if found is not None:
            self.state.data = found
        return found

    async def create(self, data: GateOperationCreate) -> Optional[Dict[str, Any]]:
        created = await self._run(self.service.create(data), "Failed to record gate operation")
        if created is not None:
            # the list is always refreshed unfiltered after a new operation
            await self.fetch_all()
        return created
