from typing import Optional

from portal.client.http import ApiClient
from portal.schemas.audit_log import AuditLogFilters, AuditLogPage


class AuditLogService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list(self, filters: Optional[AuditLogFilters] = None) -> AuditLogPage:
        # unset filters never reach the query string
        params = filters.to_api() if filters else None
        r = await self.client.get("/users/audit-logs", params=params)
        return AuditLogPage.model_validate(r.json())
