# Overview: Employee view controller; Manager CRUD keyed by role, Supervisor read-only team list.

"""
Employees are created, edited and deleted by a Manager through per-role
endpoints (/manager/<role>/create|update|delete). A Supervisor only sees the
team list the backend returns for their warehouse.

Grouping by role or by warehouse happens only for display; it is never used
to decide what a session may see.
"""

from __future__ import annotations

from collections import OrderedDict

from ..models import Employee, EMPLOYEE_ID_KEYS, EMPLOYEE_ROLES, ROLE_AUDITOR
from .api_client import ENVELOPE_EMPLOYEES
from .base_controller import EntityController
from .endpoints import EMPLOYEE_LIST, employee_create_path, employee_update_path, employee_delete_path
from .permission_service import CapabilityDeniedError


def parse_employees(raw: list) -> list[Employee]:
    return [Employee.from_dict(entry) for entry in raw if isinstance(entry, dict)]


class EmployeeController(EntityController):
    name = "employees"
    id_keys = EMPLOYEE_ID_KEYS

    def __init__(self, store, *, warehouse_names: dict[str, str] | None = None, **kwargs):
        super().__init__(store, **kwargs)
        path = EMPLOYEE_LIST.get(store.role)
        if path is None:
            raise CapabilityDeniedError(f"Role {store.role or 'anonymous'} cannot list employees")
        self.list_path = path
        self.warehouse_names = warehouse_names or {}

    @property
    def read_only(self) -> bool:
        return not self.capabilities.can_manage_employees

    def _fetch(self) -> list[Employee]:
        employees = parse_employees(self.api.fetch_list(self.list_path, envelope=ENVELOPE_EMPLOYEES))
        for employee in employees:
            if employee.warehouse_id and not employee.warehouse_name:
                employee.warehouse_name = self.warehouse_names.get(employee.warehouse_id)
        return employees

    def grouped_by_role(self) -> "OrderedDict[str, list[Employee]]":
        groups: OrderedDict[str, list[Employee]] = OrderedDict(
            (role, []) for role in (ROLE_AUDITOR, "Supervisor", "Staff")
        )
        for employee in self.records:
            groups.setdefault(employee.role, []).append(employee)
        return groups

    def assigned_to(self, warehouse_id: str) -> list[Employee]:
        """Supervisors and Staff shown on a warehouse page (display grouping)."""
        return [
            e for e in self.records
            if e.warehouse_id == warehouse_id and e.role in ("Supervisor", "Staff")
        ]

    def _payload(self, form: dict, *, include_password: bool) -> dict:
        payload = {
            "full_name": form["full_name"],
            "email": form["email"],
        }
        if form.get("role") != ROLE_AUDITOR:
            payload["warehouse_id"] = form.get("warehouse_id", "")
        if include_password and form.get("password"):
            payload["password"] = form["password"]
        return payload

    def create(self, form: dict) -> Employee:
        self._require("MANAGE_EMPLOYEES")
        role = form["role"]
        if role not in EMPLOYEE_ROLES:
            raise ValueError(f"Cannot create employee with role {role}")
        warehouse_id = form.get("warehouse_id") or None
        record = Employee(
            id="",
            full_name=form["full_name"],
            email=form["email"],
            role=role,
            warehouse_id=warehouse_id,
            warehouse_name=self.warehouse_names.get(warehouse_id) if warehouse_id else None,
        )
        payload = self._payload(form, include_password=True)
        return self._mutate(
            lambda: self.state.create(record, lambda: self.api.create(employee_create_path(role), payload))
        )

    def update(self, employee_id: str, form: dict, *, role: str | None = None) -> Employee | None:
        """The role of an existing employee is fixed; it only picks the endpoint."""
        self._require("MANAGE_EMPLOYEES")
        role = self._role_of(employee_id, role)
        warehouse_id = form.get("warehouse_id") or None
        changes = {
            "full_name": form["full_name"],
            "email": form["email"],
            "warehouse_id": warehouse_id,
            "warehouse_name": self.warehouse_names.get(warehouse_id) if warehouse_id else None,
        }
        payload = self._payload({**form, "role": role}, include_password=True)
        return self._mutate(
            lambda: self.state.update(
                employee_id,
                changes,
                lambda: self.api.update(employee_update_path(role, employee_id), payload, method="POST"),
            )
        )

    def delete(self, employee_id: str, *, role: str | None = None) -> None:
        self._require("MANAGE_EMPLOYEES")
        role = self._role_of(employee_id, role)
        self._mutate(
            lambda: self.state.delete(
                employee_id, lambda: self.api.delete(employee_delete_path(role, employee_id))
            )
        )

    def _role_of(self, employee_id: str, fallback: str | None) -> str:
        role = fallback or self.get(employee_id).role
        if role not in EMPLOYEE_ROLES:
            raise ValueError("Unknown employee role")
        return role
