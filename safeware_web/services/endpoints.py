# Overview: Backend resource paths, grouped per role so views never assemble them ad hoc.

from __future__ import annotations

from dataclasses import dataclass

from ..models import ROLE_MANAGER, ROLE_SUPERVISOR, ROLE_STAFF, ROLE_AUDITOR


AUTH_LOGIN = "/auth/login"
AUTH_REGISTER = "/auth/register"
AUTH_LOGOUT = "/auth/logout"
USERS_ME = "/users/me"


@dataclass(frozen=True)
class ItemEndpoints:
    """Item paths for one role. Mutating paths are None for read-only roles."""
    list_path: str
    create_path: str | None = None
    update_path: str | None = None
    delete_path: str | None = None
    update_method: str = "PUT"
    # Per-warehouse listing uses "{warehouse_id}" in list_path
    scoped_by_warehouse: bool = False

    @property
    def read_only(self) -> bool:
        return self.create_path is None

    def list_url(self, warehouse_id: str | None = None) -> str:
        if self.scoped_by_warehouse:
            if not warehouse_id:
                raise ValueError("warehouse_id is required for this item listing")
            return self.list_path.format(warehouse_id=warehouse_id)
        return self.list_path

    def update_url(self, item_id: str) -> str:
        return self.update_path.format(item_id=item_id)

    def delete_url(self, item_id: str) -> str:
        return self.delete_path.format(item_id=item_id)


MANAGER_ALL_ITEMS = "/manager/items/all"

ITEM_ENDPOINTS = {
    ROLE_MANAGER: ItemEndpoints(
        list_path="/manager/items/warehouse/{warehouse_id}",
        create_path="/manager/item/create",
        update_path="/manager/item/update/{item_id}",
        delete_path="/manager/item/remove/{item_id}",
        scoped_by_warehouse=True,
    ),
    ROLE_SUPERVISOR: ItemEndpoints(
        list_path="/supervisor/items",
        create_path="/supervisor/item/add",
        update_path="/supervisor/item/update/{item_id}",
        delete_path="/supervisor/item/remove/{item_id}",
    ),
    ROLE_STAFF: ItemEndpoints(
        list_path="/staff/items",
        create_path="/staff/item/add",
        update_path="/staff/item/update/{item_id}",
        delete_path="/staff/item/remove/{item_id}",
    ),
    ROLE_AUDITOR: ItemEndpoints(
        list_path="/auditor/items/warehouse/{warehouse_id}",
        scoped_by_warehouse=True,
    ),
}


WAREHOUSE_LIST = {
    ROLE_MANAGER: "/manager/summary/warehouses",
    ROLE_AUDITOR: "/auditor/warehouses",
}
WAREHOUSE_CREATE = "/manager/warehouse/create"
WAREHOUSE_UPDATE = "/manager/warehouse/update/{warehouse_id}"
WAREHOUSE_DELETE = "/manager/warehouse/delete/{warehouse_id}"


EMPLOYEE_LIST = {
    ROLE_MANAGER: "/manager/employees",
    ROLE_SUPERVISOR: "/supervisor/employees",
}


def employee_create_path(role: str) -> str:
    return f"/manager/{role.lower()}/create"


def employee_update_path(role: str, employee_id: str) -> str:
    return f"/manager/{role.lower()}/update/{employee_id}"


def employee_delete_path(role: str, employee_id: str) -> str:
    return f"/manager/{role.lower()}/delete/{employee_id}"


AUDIT_LOGS = {
    ROLE_MANAGER: "/manager/audit-logs",
    ROLE_AUDITOR: "/auditor/audit-logs",
}
