# Overview: Client-side records for the entities served by the inventory API.

"""
Transient, possibly-stale copies of backend-owned records.

Nothing here is authoritative: the backend owns every entity and the
frontend only holds what it last fetched, plus optimistic patches.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any

from .time_utils import parse_iso_datetime


ROLE_MANAGER = "Manager"
ROLE_SUPERVISOR = "Supervisor"
ROLE_STAFF = "Staff"
ROLE_AUDITOR = "Auditor"

ALL_ROLES = (ROLE_MANAGER, ROLE_SUPERVISOR, ROLE_STAFF, ROLE_AUDITOR)
EMPLOYEE_ROLES = (ROLE_SUPERVISOR, ROLE_STAFF, ROLE_AUDITOR)
WAREHOUSE_BOUND_ROLES = (ROLE_SUPERVISOR, ROLE_STAFF)

ITEM_QUALITIES = ("New", "Used", "Damaged")

# Identifier keys per resource; a foreign key of another resource never counts
ID_KEYS = ("id", "_id")
ITEM_ID_KEYS = ID_KEYS + ("item_id",)
WAREHOUSE_ID_KEYS = ID_KEYS + ("warehouse_id",)
EMPLOYEE_ID_KEYS = ID_KEYS + ("user_id",)


def extract_id(data: Any, keys: tuple[str, ...] = ID_KEYS) -> str | None:
    """First non-empty identifier in a server response, or None."""
    if not isinstance(data, dict):
        return None
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return str(value)
    return None


def _opt_str(value: Any) -> str | None:
    if value in (None, ""):
        return None
    return str(value)


def _num(value: Any, cast, default):
    if value in (None, ""):
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        return default


@dataclass
class User:
    id: str
    email: str
    full_name: str
    role: str
    company_id: str | None = None
    warehouse_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=str(data.get("id") or data.get("_id") or ""),
            email=data.get("email") or "",
            full_name=data.get("full_name") or "",
            role=data.get("role") or "",
            company_id=_opt_str(data.get("company_id")),
            warehouse_id=_opt_str(data.get("warehouse_id")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Warehouse:
    id: str
    name: str
    location: str = ""
    capacity: int | None = None
    supervisor_id: str | None = None
    # Server-computed summaries, shown as-is when present
    items_count: int | None = None
    total_value: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Warehouse":
        return cls(
            id=str(data.get("id") or data.get("_id") or ""),
            name=data.get("name") or "",
            location=data.get("location") or "",
            capacity=_num(data.get("capacity"), int, None),
            supervisor_id=_opt_str(data.get("supervisor_id")),
            items_count=_num(data.get("items_count"), int, None),
            total_value=_num(data.get("total_value"), float, None),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Item:
    id: str
    name: str
    quantity: int = 0
    price: float = 0.0
    warehouse_id: str | None = None
    sku: str | None = None
    quality: str | None = None
    department: str | None = None
    batch: str | None = None

    @property
    def total_value(self) -> float:
        """Derived on every read; there is no stored total."""
        return self.quantity * self.price

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        return cls(
            id=str(data.get("id") or data.get("_id") or ""),
            name=data.get("name") or "",
            quantity=_num(data.get("quantity"), int, 0),
            price=_num(data.get("price"), float, 0.0),
            warehouse_id=_opt_str(data.get("warehouse_id")),
            sku=_opt_str(data.get("sku")),
            quality=_opt_str(data.get("quality")),
            department=_opt_str(data.get("department")),
            batch=_opt_str(data.get("batch")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Employee:
    id: str
    full_name: str
    email: str
    role: str
    warehouse_id: str | None = None
    warehouse_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Employee":
        return cls(
            id=str(data.get("id") or data.get("_id") or data.get("user_id") or ""),
            full_name=data.get("full_name") or "",
            email=data.get("email") or "",
            role=data.get("role") or "",
            warehouse_id=_opt_str(data.get("warehouse_id")),
            warehouse_name=_opt_str(data.get("warehouse_name")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AuditLogEntry:
    id: str
    action: str
    resource_type: str = ""
    resource_id: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    timestamp: datetime | None = None
    details: Any = None
    status: str | None = None
    ip_address: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "AuditLogEntry":
        raw_ts = data.get("timestamp") or data.get("created_at")
        try:
            timestamp = parse_iso_datetime(raw_ts) if isinstance(raw_ts, str) else None
        except ValueError:
            timestamp = None
        return cls(
            id=str(data.get("id") or data.get("_id") or ""),
            action=data.get("action") or "",
            resource_type=data.get("resource_type") or "",
            resource_id=_opt_str(data.get("resource_id")),
            user_id=_opt_str(data.get("user_id")),
            user_name=_opt_str(data.get("user_name") or data.get("username")),
            timestamp=timestamp,
            details=data.get("details"),
            status=_opt_str(data.get("status")),
            ip_address=_opt_str(data.get("ip_address")),
        )


@dataclass
class LoginResponse:
    access_token: str
    refresh_token: str | None
    user: User
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "LoginResponse":
        if not isinstance(data, dict) or not data.get("access_token"):
            raise ValueError("Login response is missing an access token")
        user = data.get("user")
        if not isinstance(user, dict):
            raise ValueError("Login response is missing the user profile")
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            user=User.from_dict(user),
            raw=data,
        )
