from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from portal.schemas.base import APIModel


class AuditLog(APIModel):
    id: str
    user_id: Optional[str] = None
    user_role: Optional[str] = None
    user_name: Optional[str] = None
    action: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    details: Optional[str] = None
    ip_address: Optional[str] = None
    timestamp: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuditLogFilters(APIModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    user_id: Optional[str] = None
    action_type: Optional[str] = None
    entity_type: Optional[str] = None
    page: Optional[int] = Field(None, ge=1)
    limit: Optional[int] = Field(None, ge=1, le=500)


class AuditLogPage(APIModel):
    logs: List[AuditLog] = []
    total: int = 0
    page: int = 1
    limit: int = 50

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total + self.limit - 1) // self.limit
