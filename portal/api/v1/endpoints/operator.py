# portal/api/v1/endpoints/operator.py
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from portal.api.v1.endpoints.gate import perform_gate_out
from portal.core.deps import ensure_ok, require_role
from portal.schemas.container import (
    BlockAssignForm,
    BlockAssignment,
    ContainerFilters,
    ContainerUpdate,
    YardLocation,
)
from portal.schemas.equipment import EquipmentUpdate
from portal.schemas.gate import GateInForm, GateOperationFilters
from portal.schemas.vehicle import VehicleUpdate
from portal.services.sessions import PortalSession
from portal.store.fleet import fleet_counts
from portal.services.yard_metrics import block_occupancy, summarize

router = APIRouter(tags=["operator"])
operator_only = require_role("operator")


# === Dashboard ===
@router.get("/dashboard")
async def dashboard(session: PortalSession = Depends(operator_only)):
    dash = session.store.dashboard
    kpi = await dash.fetch_kpi()
    ensure_ok(dash.state)
    return {"user": session.user, "kpi": kpi}


# === Gate operations ===
@router.get("/gate-operations")
async def gate_operations(
    filters: Annotated[GateOperationFilters, Query()],
    session: PortalSession = Depends(operator_only),
):
    store = session.store
    await store.gate_operations.fetch_all(filters)
    ensure_ok(store.gate_operations.state)
    await store.dashboard.fetch_kpi()
    await store.shipping_lines.fetch_all()
    return {
        "operations": store.gate_operations.operations,
        "kpi": store.dashboard.state.data,
        "shippingLines": store.shipping_lines.lines,
    }


@router.post("/gate-operations/gate-in", status_code=201)
async def gate_in(body: GateInForm, session: PortalSession = Depends(operator_only)):
    gate = session.store.gate_operations
    created = await gate.create(body.to_payload())
    ensure_ok(gate.state)
    return {"operation": created, "operations": gate.operations}


@router.post("/gate-operations/gate-out", status_code=201)
async def gate_out(body: Dict[str, Any] = Body(...), session: PortalSession = Depends(operator_only)):
    return await perform_gate_out(session, body, container_required=True)


# === Container lookup ===
@router.get("/containers")
async def container_lookup(
    filters: Annotated[ContainerFilters, Query()],
    session: PortalSession = Depends(operator_only),
):
    containers = session.store.containers
    await containers.fetch_all(filters)
    ensure_ok(containers.state)
    return {"containers": containers.containers}


@router.get("/containers/{container_id}")
async def container_details(container_id: str, session: PortalSession = Depends(operator_only)):
    containers = session.store.containers
    containers.clear_current()
    await containers.fetch_by_id(container_id)
    ensure_ok(containers.state)
    await containers.fetch_history(container_id)
    ensure_ok(containers.state)
    return {"container": containers.current, "history": containers.history}


# === Yard operations ===
async def _yard_view(session: PortalSession, filters: ContainerFilters) -> Dict[str, Any]:
    store = session.store
    await store.yard.fetch_blocks()
    ensure_ok(store.yard.state)
    await store.containers.fetch_all(filters.model_copy(update={"status": "in-yard"}))
    ensure_ok(store.containers.state)
    containers = store.containers.containers
    return {
        "summary": summarize(store.yard.blocks, block_occupancy(containers)),
        "containers": [c for c in containers if c.status == "in-yard"],
    }


@router.get("/yard")
async def yard_operations(
    filters: Annotated[ContainerFilters, Query()],
    session: PortalSession = Depends(operator_only),
):
    return await _yard_view(session, filters)


@router.post("/yard/assign")
async def assign_container(body: BlockAssignForm, session: PortalSession = Depends(operator_only)):
    containers = session.store.containers
    try:
        container = await containers.service.find_by_number(body.container_number)
    except ValueError:
        raise HTTPException(status_code=502, detail="Failed to fetch container")
    if container is None:
        raise HTTPException(status_code=404, detail="Container not found")
    await containers.update(container.id, ContainerUpdate(yard_location=YardLocation(block=body.block)))
    ensure_ok(containers.state)
    return await _yard_view(session, ContainerFilters())


@router.post("/yard/shift")
async def shift_container(body: BlockAssignment, session: PortalSession = Depends(operator_only)):
    containers = session.store.containers
    await containers.update(body.container_id, ContainerUpdate(yard_location=YardLocation(block=body.block)))
    ensure_ok(containers.state)
    return await _yard_view(session, ContainerFilters())


# === Vehicles & equipment ===
@router.get("/vehicles-equipment")
async def vehicles_and_equipment(session: PortalSession = Depends(operator_only)):
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


@router.patch("/vehicles/{vehicle_id}/status")
async def vehicle_status(vehicle_id: str, body: VehicleUpdate, session: PortalSession = Depends(operator_only)):
    if body.status is None:
        raise HTTPException(status_code=422, detail="Please select a status.")
    vehicles = session.store.vehicles
    await vehicles.update(vehicle_id, VehicleUpdate(status=body.status))
    ensure_ok(vehicles.state)
    return {"vehicles": vehicles.vehicles}


@router.patch("/equipment/{equipment_id}/status")
async def equipment_status(
    equipment_id: str, body: EquipmentUpdate, session: PortalSession = Depends(operator_only)
):
    if body.status is None:
        raise HTTPException(status_code=422, detail="Please select a status.")
    equipment = session.store.equipment
    await equipment.update(equipment_id, EquipmentUpdate(status=body.status))
    ensure_ok(equipment.state)
    return {"equipment": equipment.equipment}


@router.post("/vehicles/gate-out", status_code=201)
async def vehicle_gate_out(body: Dict[str, Any] = Body(...), session: PortalSession = Depends(operator_only)):
    """Gate-out started from the vehicle list; the container is optional there."""
    return await perform_gate_out(session, body, container_required=False)
