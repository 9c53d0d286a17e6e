from __future__ import annotations

import math
import re
from typing import Any, Mapping

from .models import EMPLOYEE_ROLES, WAREHOUSE_BOUND_ROLES, ROLE_AUDITOR, ITEM_QUALITIES


MIN_PASSWORD_LENGTH = 8

# Maximum price accepted by the form: 9,999,999.99
MAX_PRICE = 9_999_999.99

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(ValueError):
    """
    Input problem caught before any network call.

    errors maps a form field to its message; "__all__" holds form-level problems.
    """

    def __init__(self, errors: dict[str, str] | str):
        if isinstance(errors, str):
            errors = {"__all__": errors}
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _require(errors: dict, data: Mapping[str, Any], key: str) -> str:
    value = _text(data, key)
    if not value:
        errors[key] = "Required"
    return value


def _email(errors: dict, data: Mapping[str, Any], key: str = "email") -> str:
    value = _require(errors, data, key)
    if value and not EMAIL_RE.match(value):
        errors[key] = "Invalid email address"
    return value


def _password(errors: dict, data: Mapping[str, Any], *, required: bool, key: str = "password") -> str:
    # Passwords are not stripped; whitespace is significant
    value = data.get(key) or ""
    if not value:
        if required:
            errors[key] = "Required"
        return ""
    if len(value) < MIN_PASSWORD_LENGTH:
        errors[key] = f"Must be at least {MIN_PASSWORD_LENGTH} characters"
    return value


def _non_negative_int(errors: dict, data: Mapping[str, Any], key: str, *, required: bool = True) -> int | None:
    """Strict integer parsing: no decimals, no scientific notation, no negatives."""
    raw = _text(data, key)
    if not raw:
        if required:
            errors[key] = "Required"
        return None
    if "e" in raw.lower() or "." in raw:
        errors[key] = "Must be a whole number"
        return None
    try:
        value = int(raw)
    except ValueError:
        errors[key] = "Must be a whole number"
        return None
    if value < 0:
        errors[key] = "Must be positive"
        return None
    return value


def _non_negative_number(errors: dict, data: Mapping[str, Any], key: str, *, maximum: float | None = None) -> float | None:
    raw = _text(data, key)
    if not raw:
        errors[key] = "Required"
        return None
    try:
        value = float(raw)
    except ValueError:
        errors[key] = "Must be a number"
        return None
    if math.isnan(value) or math.isinf(value):
        errors[key] = "Must be a number"
        return None
    if value < 0:
        errors[key] = "Must be positive"
        return None
    if maximum is not None and value > maximum:
        errors[key] = f"Cannot exceed {maximum:,.2f}"
        return None
    return value


def _raise_if(errors: dict) -> None:
    if errors:
        raise ValidationError(errors)


# =============================================================================
# FORMS
# =============================================================================


def validate_login_form(data: Mapping[str, Any]) -> dict:
    errors: dict[str, str] = {}
    email = _email(errors, data)
    password = data.get("password") or ""
    if not password:
        errors["password"] = "Required"
    _raise_if(errors)
    return {"email": email, "password": password}


def validate_register_form(data: Mapping[str, Any]) -> dict:
    errors: dict[str, str] = {}
    cleaned = {
        "company_name": _require(errors, data, "company_name"),
        "full_name": _require(errors, data, "full_name"),
        "email": _email(errors, data),
        "password": _password(errors, data, required=True),
    }
    _raise_if(errors)
    return cleaned


def validate_warehouse_form(data: Mapping[str, Any]) -> dict:
    errors: dict[str, str] = {}
    cleaned: dict[str, Any] = {
        "name": _require(errors, data, "name"),
        "location": _require(errors, data, "location"),
    }
    capacity = _non_negative_int(errors, data, "capacity", required=False)
    if capacity is not None:
        cleaned["capacity"] = capacity
    _raise_if(errors)
    return cleaned


def validate_item_form(data: Mapping[str, Any]) -> dict:
    errors: dict[str, str] = {}
    cleaned: dict[str, Any] = {
        "sku": _require(errors, data, "sku"),
        "name": _require(errors, data, "name"),
        "quality": _require(errors, data, "quality"),
        "quantity": _non_negative_int(errors, data, "quantity"),
        "price": _non_negative_number(errors, data, "price", maximum=MAX_PRICE),
        "department": _text(data, "department"),
        "batch": _text(data, "batch"),
    }
    if cleaned["quality"] and cleaned["quality"] not in ITEM_QUALITIES:
        errors["quality"] = f"Must be one of: {', '.join(ITEM_QUALITIES)}"
    _raise_if(errors)
    return cleaned


def validate_employee_form(
    data: Mapping[str, Any],
    *,
    editing: bool = False,
    role: str | None = None,
    allowed_roles: tuple[str, ...] = EMPLOYEE_ROLES,
) -> dict:
    """
    Employee create/edit form.

    The role decides which rules apply: Supervisor and Staff must pick a
    warehouse, an Auditor never carries one. When editing, the role is fixed
    by the existing record (pass it as `role`) and the password is optional.
    """
    errors: dict[str, str] = {}

    selected_role = role or _text(data, "role")
    if not selected_role:
        errors["role"] = "Required"
    elif selected_role not in allowed_roles:
        errors["role"] = f"Must be one of: {', '.join(allowed_roles)}"

    cleaned: dict[str, Any] = {
        "role": selected_role,
        "full_name": _require(errors, data, "full_name"),
        "email": _email(errors, data),
    }

    password = _password(errors, data, required=not editing)
    if password:
        cleaned["password"] = password

    warehouse_id = _text(data, "warehouse_id")
    if selected_role in WAREHOUSE_BOUND_ROLES:
        if not warehouse_id:
            errors["warehouse_id"] = "Required for this role"
        cleaned["warehouse_id"] = warehouse_id
    elif selected_role == ROLE_AUDITOR:
        # Auditors are company-wide; a stale selection from the form is dropped
        cleaned.pop("warehouse_id", None)

    _raise_if(errors)
    return cleaned
