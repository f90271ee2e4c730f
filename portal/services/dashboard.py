from portal.client.http import ApiClient
from portal.schemas.dashboard import KPIData


class DashboardService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def kpi(self) -> KPIData:
        r = await self.client.get("/dashboard/kpi")
        return KPIData.model_validate(r.json())
