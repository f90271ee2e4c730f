# portal/api/v1/endpoints/gate.py
"""Gate-out flow shared by the admin and operator pages."""
import logging
from typing import Any, Dict

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from portal.core.deps import ensure_ok
from portal.schemas.gate import GateOutForm
from portal.services.gate_operations import GateCheckError
from portal.services.sessions import PortalSession

log = logging.getLogger(__name__)


def gate_check_failed(e: GateCheckError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": e.message, "errors": [{"field": e.field, "message": e.message}]},
    )


async def perform_gate_out(session: PortalSession, body: Dict[str, Any], container_required: bool):
    # validated here, not by FastAPI: the page decides whether the container is mandatory
    data = {k: v for k, v in body.items() if k not in ("containerRequired", "container_required")}
    form = GateOutForm.model_validate({**data, "containerRequired": container_required})
    gate = session.store.gate_operations
    try:
        await gate.service.verify_gate_out(form)
    except GateCheckError as e:
        log.info("Gate-out refused for %s: %s", form.vehicle_number, e.message)
        return gate_check_failed(e)
    except ValueError as e:
        log.warning("Gate-out check got an unreadable upstream response: %s", e)
        raise HTTPException(status_code=502, detail="Failed to verify gate-out")
    created = await gate.create(form.to_payload())
    ensure_ok(gate.state)
    # the vehicle now shows as out-of-yard
    await session.store.vehicles.fetch_all()
    return {"operation": created, "operations": gate.operations}
