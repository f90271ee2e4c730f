from typing import Literal, Optional

from pydantic import Field

from portal.schemas.base import APIModel

VehicleType = Literal["truck", "trailer", "chassis"]
VehicleStatus = Literal["in-yard", "out-of-yard"]


class Vehicle(APIModel):
    id: str
    vehicle_number: str
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None
    type: str = "truck"
    status: str = "out-of-yard"
    gps_device_id: Optional[str] = None
    current_container: Optional[str] = None
    current_location: Optional[str] = None


class VehicleForm(APIModel):
    vehicle_number: str = Field(..., min_length=1)
    driver_name: str = Field(..., min_length=1)
    driver_phone: Optional[str] = None
    type: VehicleType = "truck"
    status: VehicleStatus = "out-of-yard"
    gps_device_id: Optional[str] = None


class VehicleUpdate(APIModel):
    vehicle_number: Optional[str] = Field(None, min_length=1)
    driver_name: Optional[str] = Field(None, min_length=1)
    driver_phone: Optional[str] = None
    type: Optional[VehicleType] = None
    status: Optional[VehicleStatus] = None
    gps_device_id: Optional[str] = None


class VehicleFilters(APIModel):
    type: Optional[str] = None
    status: Optional[str] = None
    vehicle_number: Optional[str] = None
