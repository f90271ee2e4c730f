# portal/schemas/gate.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, model_validator

from portal.schemas.base import APIModel, OptionalAmount
from portal.schemas.container import (
    CONTAINER_NUMBER_PATTERN,
    ContainerSize,
    ContainerType,
    MovementType,
)

GateOperationType = Literal["gate-in", "gate-out"]
GatePurpose = Literal["port", "factory", "transfer"]


class GateOperation(APIModel):
    id: str
    type: GateOperationType
    container_number: Optional[str] = None
    vehicle_number: str
    driver_name: Optional[str] = None
    purpose: Optional[str] = None
    remarks: Optional[str] = None
    approved_by: Optional[str] = None
    status: Optional[str] = None
    timestamp: Optional[datetime] = None


class GateOperationCreate(APIModel):
    """Payload of POST /gate-operations. Gate-in carries container details."""

    type: GateOperationType
    container_number: Optional[str] = None
    vehicle_number: str = Field(..., min_length=1)
    driver_name: str = Field(..., min_length=1)
    purpose: GatePurpose
    remarks: Optional[str] = None
    approved_by: Optional[str] = None
    size: Optional[ContainerSize] = None
    container_type: Optional[ContainerType] = None
    shipping_line: Optional[str] = None
    weight: Optional[float] = None
    cargo_weight: Optional[float] = None
    seal_number: Optional[str] = None
    empty: Optional[bool] = None
    movement_type: Optional[MovementType] = None


class GateOperationFilters(APIModel):
    type: Optional[GateOperationType] = None
    container_number: Optional[str] = None
    status: Optional[str] = None


class GateOperationForm(APIModel):
    """Admin form: any operation, always with a full container number."""

    container_number: str = Field(..., min_length=11, max_length=11, pattern=CONTAINER_NUMBER_PATTERN)
    type: GateOperationType
    vehicle_number: str = Field(..., min_length=1)
    driver_name: str = Field(..., min_length=1)
    purpose: GatePurpose
    remarks: Optional[str] = None
    approved_by: Optional[str] = None

    def to_payload(self) -> GateOperationCreate:
        return GateOperationCreate(**self.model_dump())


class GateInForm(APIModel):
    container_number: str = Field(..., min_length=11, max_length=11)
    size: ContainerSize = "40ft"
    type: ContainerType = "standard"
    movement_type: MovementType = "import"
    shipping_line: str = Field(..., min_length=1)
    weight: OptionalAmount = None
    vehicle_number: str = Field(..., min_length=1)
    driver_name: str = Field(..., min_length=1)
    purpose: GatePurpose = "port"
    seal_number: Optional[str] = None
    cargo_weight: OptionalAmount = None
    remarks: Optional[str] = None
    loaded: bool = False
    has_damage: bool = False

    def to_payload(self) -> GateOperationCreate:
        return GateOperationCreate(
            type="gate-in",
            container_number=self.container_number,
            vehicle_number=self.vehicle_number,
            driver_name=self.driver_name,
            purpose=self.purpose,
            remarks=self.remarks,
            size=self.size,
            container_type=self.type,
            shipping_line=self.shipping_line,
            weight=self.weight,
            cargo_weight=self.cargo_weight,
            seal_number=self.seal_number,
            empty=not self.loaded,
            movement_type=self.movement_type,
        )


class GateOutForm(APIModel):
    container_number: Optional[str] = None
    vehicle_number: str = Field(..., min_length=1)
    driver_name: str = Field(..., min_length=1)
    purpose: GatePurpose = "port"
    remarks: Optional[str] = None
    # set by the page when the operation moves a container out
    container_required: bool = False

    @model_validator(mode="after")
    def _check_container(self):
        number = (self.container_number or "").strip()
        self.vehicle_number = self.vehicle_number.strip()
        self.container_number = number or None
        if self.container_required and not number:
            raise ValueError("Container number is required for this operation.")
        if self.container_required and len(number) != 11:
            raise ValueError("Container number must be exactly 11 characters.")
        return self

    def to_payload(self) -> GateOperationCreate:
        return GateOperationCreate(
            type="gate-out",
            vehicle_number=self.vehicle_number,
            container_number=self.container_number,
            driver_name=self.driver_name,
            purpose=self.purpose,
            remarks=self.remarks,
        )
