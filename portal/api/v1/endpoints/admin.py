# portal/api/v1/endpoints/admin.py
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Body, Depends, Query

from portal.api.v1.endpoints.gate import perform_gate_out
from portal.core.deps import ensure_ok, require_role
from portal.schemas.audit_log import AuditLogFilters
from portal.schemas.container import ContainerFilters, ContainerForm, ContainerUpdate
from portal.schemas.equipment import EquipmentForm, EquipmentUpdate
from portal.schemas.gate import GateOperationFilters, GateOperationForm
from portal.schemas.shipping_line import ShippingLineForm, ShippingLineUpdate
from portal.schemas.user import UserCreate, UserUpdate
from portal.schemas.vehicle import VehicleForm, VehicleUpdate
from portal.schemas.yard import YardBlockForm, YardBlockUpdate
from portal.services.sessions import PortalSession
from portal.store.fleet import fleet_counts
from portal.services.yard_metrics import summarize

router = APIRouter(tags=["admin"])
admin_only = require_role("admin")


# === Dashboard ===
@router.get("/dashboard")
async def dashboard(session: PortalSession = Depends(admin_only)):
    dash = session.store.dashboard
    kpi = await dash.fetch_kpi()
    ensure_ok(dash.state)
    return {"user": session.user, "kpi": kpi}


# === Containers ===
@router.get("/containers")
async def list_containers(
    filters: Annotated[ContainerFilters, Query()],
    session: PortalSession = Depends(admin_only),
):
    containers = session.store.containers
    await containers.fetch_all(filters)
    ensure_ok(containers.state)
    # for the add-container form; a failure here leaves the list usable
    lines = session.store.shipping_lines
    await lines.fetch_all()
    return {"containers": containers.containers, "shippingLines": lines.lines}


@router.post("/containers", status_code=201)
async def create_container(body: ContainerForm, session: PortalSession = Depends(admin_only)):
    containers = session.store.containers
    resp = await containers.create(body)
    ensure_ok(containers.state)
    return {"message": resp.message or "Container created", "containers": containers.containers}


@router.get("/containers/{container_id}")
async def container_details(container_id: str, session: PortalSession = Depends(admin_only)):
    containers = session.store.containers
    containers.clear_current()
    await containers.fetch_by_id(container_id)
    ensure_ok(containers.state)
    await containers.fetch_history(container_id)
    ensure_ok(containers.state)
    return {"container": containers.current, "history": containers.history}


@router.put("/containers/{container_id}")
async def update_container(
    container_id: str, body: ContainerUpdate, session: PortalSession = Depends(admin_only)
):
    containers = session.store.containers
    resp = await containers.update(container_id, body)
    ensure_ok(containers.state)
    return {"message": resp.message or "Container updated", "container": containers.current}


@router.post("/containers/{container_id}/blacklist")
async def blacklist_container(container_id: str, session: PortalSession = Depends(admin_only)):
    containers = session.store.containers
    resp = await containers.blacklist(container_id)
    ensure_ok(containers.state)
    return {"message": resp.message or "Container blacklisted", "blacklisted": True}


@router.post("/containers/{container_id}/unblacklist")
async def unblacklist_container(container_id: str, session: PortalSession = Depends(admin_only)):
    containers = session.store.containers
    resp = await containers.unblacklist(container_id)
    ensure_ok(containers.state)
    return {"message": resp.message or "Container removed from blacklist", "blacklisted": False}


# === Gate operations ===
@router.get("/gate-operations")
async def list_gate_operations(
    filters: Annotated[GateOperationFilters, Query()],
    session: PortalSession = Depends(admin_only),
):
    gate = session.store.gate_operations
    await gate.fetch_all(filters)
    ensure_ok(gate.state)
    return {"operations": gate.operations}


@router.post("/gate-operations", status_code=201)
async def create_gate_operation(body: GateOperationForm, session: PortalSession = Depends(admin_only)):
    gate = session.store.gate_operations
    created = await gate.create(body.to_payload())
    ensure_ok(gate.state)
    return {"operation": created, "operations": gate.operations}


# === Users ===
@router.get("/users")
async def list_users(session: PortalSession = Depends(admin_only)):
    admin = session.store.admin
    await admin.fetch_all_users()
    ensure_ok(admin.state)
    users = admin.users
    return {
        "users": users,
        "terminalUsers": [u for u in users if u.role == "operator"],
        "externalUsers": [u for u in users if u.role in ("customer", "admin")],
    }


@router.post("/users", status_code=201)
async def create_user(body: UserCreate, session: PortalSession = Depends(admin_only)):
    admin = session.store.admin
    resp = await admin.create_user(body)
    ensure_ok(admin.state)
    return {"message": resp.message or "User created", "users": admin.users}


@router.put("/users/{user_id}")
async def update_user(user_id: str, body: UserUpdate, session: PortalSession = Depends(admin_only)):
    admin = session.store.admin
    resp = await admin.update_user(user_id, body)
    ensure_ok(admin.state)
    return {"message": resp.message or "User updated", "user": resp.user}


@router.post("/users/{user_id}/toggle-block")
async def toggle_user_block(user_id: str, session: PortalSession = Depends(admin_only)):
    admin = session.store.admin
    resp = await admin.toggle_user_block(user_id)
    ensure_ok(admin.state)
    return {"user": resp.user}


# === Shipping lines ===
@router.get("/shipping-lines")
async def list_shipping_lines(session: PortalSession = Depends(admin_only)):
    lines = session.store.shipping_lines
    await lines.fetch_all()
    ensure_ok(lines.state)
    return {"shippingLines": lines.lines}


@router.post("/shipping-lines", status_code=201)
async def create_shipping_line(body: ShippingLineForm, session: PortalSession = Depends(admin_only)):
    lines = session.store.shipping_lines
    await lines.create(body)
    ensure_ok(lines.state)
    return {"shippingLines": lines.lines}


@router.put("/shipping-lines/{line_id}")
async def update_shipping_line(
    line_id: str, body: ShippingLineUpdate, session: PortalSession = Depends(admin_only)
):
    lines = session.store.shipping_lines
    await lines.update(line_id, body)
    ensure_ok(lines.state)
    return {"shippingLines": lines.lines}


# === Yard configuration ===
@router.get("/yard")
async def yard_configuration(session: PortalSession = Depends(admin_only)):
    yard = session.store.yard
    blocks = await yard.fetch_blocks()
    ensure_ok(yard.state)
    return {"summary": summarize(blocks)}


@router.post("/yard/blocks", status_code=201)
async def create_block(body: YardBlockForm, session: PortalSession = Depends(admin_only)):
    yard = session.store.yard
    await yard.create_block(body)
    ensure_ok(yard.state)
    return {"summary": summarize(yard.blocks)}


@router.put("/yard/blocks/{block_id}")
async def update_block(block_id: str, body: YardBlockUpdate, session: PortalSession = Depends(admin_only)):
    yard = session.store.yard
    await yard.update_block(block_id, body)
    ensure_ok(yard.state)
    return {"summary": summarize(yard.blocks)}


# === Vehicles & equipment ===
@router.get("/vehicles-equipment")
async def vehicles_and_equipment(session: PortalSession = Depends(admin_only)):
    vehicles, equipment = session.store.vehicles, session.store.equipment
    await vehicles.fetch_all()
    ensure_ok(vehicles.state)
    await equipment.fetch_all()
    ensure_ok(equipment.state)
    return {
        "vehicles": vehicles.vehicles,
        "equipment": equipment.equipment,
        "counts": fleet_counts(vehicles.vehicles, equipment.equipment),
    }


@router.post("/vehicles", status_code=201)
async def add_vehicle(body: VehicleForm, session: PortalSession = Depends(admin_only)):
    vehicles = session.store.vehicles
    await vehicles.add(body)
    ensure_ok(vehicles.state)
    return {"vehicles": vehicles.vehicles}


@router.put("/vehicles/{vehicle_id}")
async def update_vehicle(vehicle_id: str, body: VehicleUpdate, session: PortalSession = Depends(admin_only)):
    vehicles = session.store.vehicles
    await vehicles.update(vehicle_id, body)
    ensure_ok(vehicles.state)
    return {"vehicles": vehicles.vehicles}


@router.delete("/vehicles/{vehicle_id}")
async def delete_vehicle(vehicle_id: str, session: PortalSession = Depends(admin_only)):
    vehicles = session.store.vehicles
    await vehicles.delete(vehicle_id)
    ensure_ok(vehicles.state)
    return {"vehicles": vehicles.vehicles}


@router.post("/vehicles/gate-out", status_code=201)
async def vehicle_gate_out(body: Dict[str, Any] = Body(...), session: PortalSession = Depends(admin_only)):
    return await perform_gate_out(session, body, container_required=False)


@router.post("/equipment", status_code=201)
async def add_equipment(body: EquipmentForm, session: PortalSession = Depends(admin_only)):
    equipment = session.store.equipment
    await equipment.add(body)
    ensure_ok(equipment.state)
    return {"equipment": equipment.equipment}


@router.put("/equipment/{equipment_id}")
async def update_equipment(
    equipment_id: str, body: EquipmentUpdate, session: PortalSession = Depends(admin_only)
):
    equipment = session.store.equipment
    await equipment.update(equipment_id, body)
    ensure_ok(equipment.state)
    return {"equipment": equipment.equipment}


@router.delete("/equipment/{equipment_id}")
async def delete_equipment(equipment_id: str, session: PortalSession = Depends(admin_only)):
    equipment = session.store.equipment
    await equipment.delete(equipment_id)
    ensure_ok(equipment.state)
    return {"equipment": equipment.equipment}


# === Audit logs ===
@router.get("/audit-logs")
async def audit_logs(
    filters: Annotated[AuditLogFilters, Query()],
    session: PortalSession = Depends(admin_only),
):
    logs = session.store.audit_logs
    await logs.fetch(filters)
    ensure_ok(logs.state)
    page = logs.page
    return {
        "logs": page.logs,
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "totalPages": page.total_pages,
    }
