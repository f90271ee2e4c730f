# tests/test_gate_out_check.py
import pytest

from portal.client.http import ApiClient
from portal.schemas.gate import GateOutForm
from portal.services.gate_operations import GateCheckError, GateOperationService

pytestmark = pytest.mark.anyio


def _form(container="MSCU1234567"):
    return GateOutForm(container_number=container, vehicle_number="TRK-1", driver_name="Sam")


def _lookup(upstream, containers, vehicles):
    upstream.route("GET", "/containers", (200, containers))
    upstream.route("GET", "/vehicles", (200, vehicles))


CONTAINER = {"id": "c1", "containerNumber": "MSCU1234567", "status": "in-yard"}
VEHICLE = {"id": "v1", "vehicleNumber": "TRK-1", "status": "in-yard"}


async def test_passes_for_container_and_vehicle_in_yard(api_client: ApiClient, upstream):
    _lookup(upstream, [CONTAINER], [VEHICLE])

    await GateOperationService(api_client).verify_gate_out(_form())

    sent = upstream.calls("GET", "/containers")[0]
    assert sent.url.params["containerNumber"] == "MSCU1234567"


async def test_unknown_container(api_client: ApiClient, upstream):
    _lookup(upstream, [], [VEHICLE])

    with pytest.raises(GateCheckError) as exc:
        await GateOperationService(api_client).verify_gate_out(_form())

    assert exc.value.field == "containerNumber"
    assert exc.value.message == "Container not found in system."


async def test_container_outside_terminal(api_client: ApiClient, upstream):
    _lookup(upstream, [{**CONTAINER, "status": "gate-out"}], [VEHICLE])

    with pytest.raises(GateCheckError) as exc:
        await GateOperationService(api_client).verify_gate_out(_form())

    assert exc.value.message == (
        "Container status is 'gate-out'. Only containers currently inside terminal can Gate-Out."
    )


@pytest.mark.parametrize("status", ["gate-in", "in-yard", "at-port", "at-factory"])
async def test_inside_terminal_statuses_pass(api_client: ApiClient, upstream, status):
    _lookup(upstream, [{**CONTAINER, "status": status}], [VEHICLE])

    await GateOperationService(api_client).verify_gate_out(_form())


async def test_vehicle_checks(api_client: ApiClient, upstream):
    service = GateOperationService(api_client)

    _lookup(upstream, [CONTAINER], [])
    with pytest.raises(GateCheckError) as missing:
        await service.verify_gate_out(_form())
    assert (missing.value.field, missing.value.message) == ("vehicleNumber", "Vehicle not found in system.")

    _lookup(upstream, [CONTAINER], [{**VEHICLE, "status": "out-of-yard"}])
    with pytest.raises(GateCheckError) as outside:
        await service.verify_gate_out(_form())
    assert outside.value.message == (
        "Vehicle status is 'out-of-yard'. Only vehicles currently In-Yard can Gate-Out."
    )


async def test_no_container_skips_container_lookup(api_client: ApiClient, upstream):
    _lookup(upstream, [], [VEHICLE])

    await GateOperationService(api_client).verify_gate_out(_form(container=None))

    assert upstream.calls("GET", "/containers") == []
