from typing import List, Optional

from pydantic import Field

from portal.schemas.base import APIModel


class YardBlock(APIModel):
    id: str
    name: str
    capacity: int = 0
    occupied: int = 0


class YardBlockForm(APIModel):
    name: str = Field(..., min_length=1)
    capacity: int = Field(100, ge=0)


class YardBlockUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1)
    capacity: Optional[int] = Field(None, ge=0)


class BlockUsage(APIModel):
    id: Optional[str] = None
    name: str
    capacity: int
    occupied: int
    free: int
    utilization: int
    load: str


class YardSummary(APIModel):
    total_capacity: int
    total_occupied: int
    free_slots: int
    utilization: int
    blocks: List[BlockUsage]
