# portal/services/yard_metrics.py
"""Occupancy numbers behind the yard pages' progress bars."""
from collections import Counter
from typing import Dict, Iterable, Mapping, Optional

from portal.schemas.container import Container
from portal.schemas.yard import BlockUsage, YardBlock, YardSummary

HIGH_LOAD_PERCENT = 80
MEDIUM_LOAD_PERCENT = 60


def utilization(occupied: int, capacity: int) -> int:
    """Whole-number percentage; an empty-capacity block is 0%."""
    if capacity <= 0:
        return 0
    return round(occupied / capacity * 100)


def load_band(percent: int) -> str:
    if percent > HIGH_LOAD_PERCENT:
        return "high"
    if percent > MEDIUM_LOAD_PERCENT:
        return "medium"
    return "low"


def block_occupancy(containers: Iterable[Container]) -> Dict[str, int]:
    """Containers per block name, counted from their yard locations."""
    return dict(Counter(c.block for c in containers if c.block))


def block_usage(block: YardBlock, occupied: Optional[int] = None) -> BlockUsage:
    used = block.occupied if occupied is None else occupied
    percent = utilization(used, block.capacity)
    return BlockUsage(
        id=block.id,
        name=block.name,
        capacity=block.capacity,
        occupied=used,
        free=block.capacity - used,
        utilization=percent,
        load=load_band(percent),
    )


def summarize(
    blocks: Iterable[YardBlock], occupancy: Optional[Mapping[str, int]] = None
) -> YardSummary:
    """Yard totals. With ``occupancy`` (block name -> count) the counts come
    from container locations, otherwise from each block's own ``occupied``."""
    usages = [
        block_usage(b, None if occupancy is None else occupancy.get(b.name, 0))
        for b in blocks
    ]
    total_capacity = sum(u.capacity for u in usages)
    if occupancy is None:
        total_occupied = sum(u.occupied for u in usages)
    else:
        total_occupied = sum(occupancy.values())
    return YardSummary(
        total_capacity=total_capacity,
        total_occupied=total_occupied,
        free_slots=total_capacity - total_occupied,
        utilization=utilization(total_occupied, total_capacity),
        blocks=usages,
    )
