# tests/test_forms.py
import pytest
from pydantic import ValidationError

from portal.schemas.auth import LoginRequest, ResetPasswordForm, SignupForm
from portal.schemas.container import ContainerForm
from portal.schemas.gate import GateInForm, GateOperationForm, GateOutForm
from portal.schemas.profile import PasswordUpdate


def _fields(exc: ValidationError):
    return {".".join(str(p) for p in e["loc"]) for e in exc.errors()}


def test_login_requires_email_and_password():
    with pytest.raises(ValidationError) as exc:
        LoginRequest(email="not-an-email", password="")
    assert _fields(exc.value) == {"email", "password"}


def test_signup_password_rules():
    with pytest.raises(ValidationError):
        SignupForm(name="Ada", email="ada@example.com", password="12345", confirm_password="12345")

    with pytest.raises(ValidationError) as exc:
        SignupForm(name="Ada", email="ada@example.com", password="123456", confirm_password="654321")
    assert "Passwords do not match" in str(exc.value)

    ok = SignupForm.model_validate(
        {"name": "Ada", "email": "ada@example.com", "password": "123456", "confirmPassword": "123456"}
    )
    assert ok.email == "ada@example.com"


def test_reset_password_confirmation():
    with pytest.raises(ValidationError):
        ResetPasswordForm(email="ada@example.com", otp="1234", new_password="abcdef", confirm_password="abcdeg")
    form = ResetPasswordForm(email="ada@example.com", otp="1234", new_password="abcdef", confirm_password="abcdef")
    assert form.role == "customer"


def test_password_update_confirmation():
    with pytest.raises(ValidationError):
        PasswordUpdate(current_password="old", new_password="newpass", confirm_password="other")


@pytest.mark.parametrize("number", ["MSCU123456", "mscu1234567", "MSC11234567", "MSCU12345678"])
def test_container_number_pattern(number):
    with pytest.raises(ValidationError):
        ContainerForm(container_number=number, shipping_line="MSC")


def test_container_form_defaults_and_blank_weight():
    form = ContainerForm.model_validate({"containerNumber": "MSCU1234567", "shippingLine": "MSC", "weight": ""})
    assert (form.size, form.type, form.status) == ("40ft", "standard", "pending")
    assert form.weight is None
    assert "weight" not in form.to_api()


def test_container_weight_cannot_be_negative():
    with pytest.raises(ValidationError):
        ContainerForm(container_number="MSCU1234567", shipping_line="MSC", weight=-1)


def test_container_requires_shipping_line():
    with pytest.raises(ValidationError):
        ContainerForm(container_number="MSCU1234567", shipping_line="")


def test_gate_in_payload_marks_empty_when_not_loaded():
    form = GateInForm(
        container_number="MSCU1234567",
        shipping_line="MSC",
        vehicle_number="TRK-1",
        driver_name="Sam",
        movement_type="export",
    )
    payload = form.to_payload().to_api()

    assert payload["type"] == "gate-in"
    assert payload["empty"] is True
    assert payload["containerType"] == "standard"
    assert payload["movementType"] == "export"


def test_gate_in_rejects_unknown_movement_type():
    with pytest.raises(ValidationError):
        GateInForm(
            container_number="MSCU1234567",
            shipping_line="MSC",
            vehicle_number="TRK-1",
            driver_name="Sam",
            movement_type="transit",
        )


def test_gate_out_container_optional_unless_required():
    form = GateOutForm(vehicle_number=" TRK-1 ", driver_name="Sam", container_number="  ")
    assert form.container_number is None
    assert form.vehicle_number == "TRK-1"

    with pytest.raises(ValidationError) as missing:
        GateOutForm(vehicle_number="TRK-1", driver_name="Sam", container_required=True)
    assert "Container number is required for this operation." in str(missing.value)

    with pytest.raises(ValidationError) as short:
        GateOutForm(vehicle_number="TRK-1", driver_name="Sam", container_number="MSCU123", container_required=True)
    assert "exactly 11 characters" in str(short.value)


def test_gate_out_requires_vehicle_and_driver():
    with pytest.raises(ValidationError) as exc:
        GateOutForm.model_validate({"vehicleNumber": "", "driverName": ""})
    assert _fields(exc.value) == {"vehicleNumber", "driverName"}


def test_admin_gate_operation_uses_full_pattern():
    with pytest.raises(ValidationError):
        GateOperationForm(
            container_number="MSCU12345AB", type="gate-in", vehicle_number="T", driver_name="D", purpose="port"
        )
