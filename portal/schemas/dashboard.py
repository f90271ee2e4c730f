from portal.schemas.base import APIModel


class KPIData(APIModel):
    total_containers_in_yard: int = 0
    containers_in_transit: int = 0
    gate_in_today: int = 0
    gate_out_today: int = 0
    yard_utilization: float = 0
    pending_approvals: int = 0
    tasks_today: int = 0
