# portal/store/store.py
from portal.client.http import ApiClient
from portal.store.admin import AdminSlice
from portal.store.audit_logs import AuditLogSlice
from portal.store.auth import AuthSlice
from portal.store.containers import ContainerSlice
from portal.store.dashboard import DashboardSlice
from portal.store.fleet import EquipmentSlice, VehicleSlice
from portal.store.gate_operations import GateOperationSlice
from portal.store.profile import ProfileSlice
from portal.store.shipping_lines import ShippingLineSlice
from portal.store.yard import YardSlice


class Store:
    """Every slice of one session, all sharing that session's client."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.auth = AuthSlice(client)
        self.containers = ContainerSlice(client)
        self.gate_operations = GateOperationSlice(client)
        self.vehicles = VehicleSlice(client)
        self.equipment = EquipmentSlice(client)
        self.yard = YardSlice(client)
        self.shipping_lines = ShippingLineSlice(client)
        self.profile = ProfileSlice(client)
        self.admin = AdminSlice(client)
        self.audit_logs = AuditLogSlice(client)
        self.dashboard = DashboardSlice(client)

    @property
    def slices(self):
        return (
            self.auth,
            self.containers,
            self.gate_operations,
            self.vehicles,
            self.equipment,
            self.yard,
            self.shipping_lines,
            self.profile,
            self.admin,
            self.audit_logs,
            self.dashboard,
        )

    def reset(self) -> None:
        """Back to a logged-out state; used when the session ends."""
        for s in self.slices:
            s.reset()
