# Overview: Default capability grants per role, plus each role's home route.

from ..models import ROLE_MANAGER, ROLE_SUPERVISOR, ROLE_STAFF, ROLE_AUDITOR


ROLE_CAPABILITIES = {
    ROLE_MANAGER: [
        "VIEW_DASHBOARD",
        "VIEW_ITEMS",
        "EDIT_ITEMS",
        "VIEW_WAREHOUSES",
        "MANAGE_WAREHOUSES",
        "MANAGE_EMPLOYEES",
        "VIEW_AUDIT_LOGS",
    ],
    ROLE_SUPERVISOR: [
        "VIEW_DASHBOARD",
        "VIEW_ITEMS",
        "EDIT_ITEMS",
        "VIEW_TEAM",
    ],
    ROLE_STAFF: [
        "VIEW_DASHBOARD",
        "VIEW_ITEMS",
        "EDIT_ITEMS",
    ],
    ROLE_AUDITOR: [
        "VIEW_DASHBOARD",
        "VIEW_ITEMS",
        "VIEW_WAREHOUSES",
        "VIEW_AUDIT_LOGS",
        "READ_ONLY",
    ],
}


# Blueprint endpoint each role lands on after login
ROLE_HOME_ENDPOINTS = {
    ROLE_MANAGER: "manager.dashboard",
    ROLE_SUPERVISOR: "supervisor.dashboard",
    ROLE_STAFF: "staff.dashboard",
    ROLE_AUDITOR: "auditor.dashboard",
}


# Navigation entries per role: (label, endpoint, required capability)
ROLE_NAVIGATION = {
    ROLE_MANAGER: [
        ("Dashboard", "manager.dashboard", "VIEW_DASHBOARD"),
        ("Employees", "manager.employees", "MANAGE_EMPLOYEES"),
        ("Warehouses", "manager.warehouses", "MANAGE_WAREHOUSES"),
        ("Audit Logs", "manager.logs", "VIEW_AUDIT_LOGS"),
    ],
    ROLE_SUPERVISOR: [
        ("Dashboard", "supervisor.dashboard", "VIEW_DASHBOARD"),
        ("Employees", "supervisor.employees", "VIEW_TEAM"),
    ],
    ROLE_STAFF: [
        ("Dashboard", "staff.dashboard", "VIEW_DASHBOARD"),
    ],
    ROLE_AUDITOR: [
        ("Dashboard", "auditor.dashboard", "VIEW_DASHBOARD"),
        ("Warehouses", "auditor.warehouses", "VIEW_WAREHOUSES"),
        ("Audit Logs", "auditor.logs", "VIEW_AUDIT_LOGS"),
    ],
}
