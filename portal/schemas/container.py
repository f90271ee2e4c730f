# portal/schemas/container.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from portal.schemas.base import APIModel, OptionalAmount

CONTAINER_NUMBER_PATTERN = r"^[A-Z]{4}\d{7}$"

ContainerSize = Literal["20ft", "40ft"]
ContainerType = Literal["standard", "reefer", "tank", "open-top"]
ContainerStatus = Literal[
    "pending",
    "in-yard",
    "in-transit",
    "at-port",
    "at-factory",
    "gate-in",
    "gate-out",
    "damaged",
]
MovementType = Literal["import", "export", "domestic"]

# statuses of a container physically inside the terminal
INSIDE_TERMINAL_STATUSES = ("gate-in", "in-yard", "at-port", "at-factory")


class YardLocation(APIModel):
    block: str = ""


class Container(APIModel):
    id: str
    container_number: str
    size: Optional[ContainerSize] = None
    type: Optional[str] = None
    status: str
    shipping_line: Optional[str] = None
    customer: Optional[str] = None
    weight: Optional[float] = None
    seal_number: Optional[str] = None
    yard_location: Optional[YardLocation] = None
    movement_type: Optional[str] = None
    gate_in_time: Optional[datetime] = None
    gate_out_time: Optional[datetime] = None
    dwell_time: Optional[float] = None
    damaged: bool = False
    damage_details: Optional[str] = None
    blacklisted: bool = False

    @property
    def block(self) -> Optional[str]:
        if self.yard_location and self.yard_location.block:
            return self.yard_location.block
        return None


class ContainerHistory(APIModel):
    id: str
    action: str
    details: Optional[str] = None
    performed_by: Optional[str] = None
    timestamp: Optional[datetime] = None


class ContainerForm(APIModel):
    container_number: str = Field(
        ...,
        min_length=11,
        max_length=11,
        pattern=CONTAINER_NUMBER_PATTERN,
        description="4 letters + 7 digits, e.g. MSCU1234567",
    )
    size: ContainerSize = "40ft"
    type: ContainerType = "standard"
    status: ContainerStatus = "pending"
    shipping_line: str = Field(..., min_length=1)
    customer: Optional[str] = None
    weight: OptionalAmount = None
    seal_number: Optional[str] = None
    yard_location: Optional[YardLocation] = None


class ContainerUpdate(APIModel):
    size: Optional[ContainerSize] = None
    type: Optional[ContainerType] = None
    status: Optional[ContainerStatus] = None
    shipping_line: Optional[str] = None
    customer: Optional[str] = None
    weight: OptionalAmount = None
    seal_number: Optional[str] = None
    yard_location: Optional[YardLocation] = None
    damaged: Optional[bool] = None
    damage_details: Optional[str] = None


class ContainerFilters(APIModel):
    container_number: Optional[str] = None
    size: Optional[str] = None
    type: Optional[str] = None
    block: Optional[str] = None
    status: Optional[str] = None


class BlockAssignment(APIModel):
    """Operator yard page: shift a listed container to another block."""

    container_id: str = Field(..., min_length=1)
    block: str = Field(..., min_length=1)
    equipment: Optional[str] = None


class BlockAssignForm(APIModel):
    """Assign by container number, as typed on the yard page."""

    container_number: str = Field(..., min_length=1)
    block: str = Field(..., min_length=1)
