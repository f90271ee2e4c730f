from datetime import datetime
from typing import Optional

from pydantic import Field

from portal.schemas.base import APIModel


class ShippingLine(APIModel):
    id: str
    name: str
    code: str
    created_at: Optional[datetime] = None


class ShippingLineForm(APIModel):
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)


class ShippingLineUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1)
    code: Optional[str] = Field(None, min_length=1)
