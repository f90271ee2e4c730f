from typing import Optional

from portal.schemas.dashboard import KPIData
from portal.services.dashboard import DashboardService
from portal.store.state import Slice


class DashboardSlice(Slice[Optional[KPIData]]):
    name = "dashboard"

    def __init__(self, client):
        super().__init__(client, initial=None)
        self.service = DashboardService(client)

    async def fetch_kpi(self) -> Optional[KPIData]:
        found = await self._run(self.service.kpi(), "Failed to fetch KPI data")
        if found is not None:
            self.state.data = found
        return found
