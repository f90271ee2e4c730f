from typing import Optional

from portal.schemas.audit_log import AuditLogFilters, AuditLogPage
from portal.services.audit_logs import AuditLogService
from portal.store.state import Slice


class AuditLogSlice(Slice[AuditLogPage]):
    """Holds the last fetched page; starts as an empty first page of 50."""

    name = "audit_log"

    def __init__(self, client):
        super().__init__(client, initial=AuditLogPage())
        self.service = AuditLogService(client)

    @property
    def page(self) -> AuditLogPage:
        return self.state.data or AuditLogPage()

    async def fetch(self, filters: Optional[AuditLogFilters] = None) -> Optional[AuditLogPage]:
        found = await self._run(self.service.list(filters), "Failed to fetch audit logs")
        if found is not None:
            self.state.data = found
        return found
