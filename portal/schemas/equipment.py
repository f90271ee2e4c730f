from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from portal.schemas.base import APIModel

EquipmentType = Literal["reach-stacker", "forklift", "crane"]
EquipmentStatus = Literal["operational", "maintenance", "down", "idle"]


class Equipment(APIModel):
    id: str
    name: str
    type: str
    status: str
    operator: Optional[str] = None
    last_maintenance: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None


class EquipmentForm(APIModel):
    name: str = Field(..., min_length=1)
    type: EquipmentType = "reach-stacker"
    status: EquipmentStatus = "operational"
    operator: Optional[str] = None


class EquipmentUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[EquipmentType] = None
    status: Optional[EquipmentStatus] = None
    operator: Optional[str] = None


class EquipmentFilters(APIModel):
    type: Optional[str] = None
    status: Optional[str] = None
    name: Optional[str] = None
