# Overview: All capability definitions organized by category.
# Each capability is defined as: (code, name, description, category)

from .categories import CapabilityCategory


# -- GENERAL --

GENERAL_CAPABILITIES = [
    (
        "VIEW_DASHBOARD",
        "View Dashboard",
        "Open the role home page",
        CapabilityCategory.GENERAL,
    ),
    (
        "READ_ONLY",
        "Read Only",
        "Marks a session that may never trigger a mutating call",
        CapabilityCategory.GENERAL,
    ),
]


# -- INVENTORY --

INVENTORY_CAPABILITIES = [
    (
        "VIEW_ITEMS",
        "View Items",
        "List items of the warehouses visible to the session",
        CapabilityCategory.INVENTORY,
    ),
    (
        "EDIT_ITEMS",
        "Edit Items",
        "Create, update and remove items",
        CapabilityCategory.INVENTORY,
    ),
]


# -- WAREHOUSES --

WAREHOUSE_CAPABILITIES = [
    (
        "VIEW_WAREHOUSES",
        "View Warehouses",
        "Browse warehouses and their summaries",
        CapabilityCategory.WAREHOUSES,
    ),
    (
        "MANAGE_WAREHOUSES",
        "Manage Warehouses",
        "Create, rename, relocate and delete warehouses",
        CapabilityCategory.WAREHOUSES,
    ),
]


# -- PEOPLE --

PEOPLE_CAPABILITIES = [
    (
        "MANAGE_EMPLOYEES",
        "Manage Employees",
        "Create, edit and delete Supervisors, Staff and Auditors",
        CapabilityCategory.PEOPLE,
    ),
    (
        "VIEW_TEAM",
        "View Team",
        "List the employees of the session's own warehouse",
        CapabilityCategory.PEOPLE,
    ),
]


# -- AUDIT --

AUDIT_CAPABILITIES = [
    (
        "VIEW_AUDIT_LOGS",
        "View Audit Logs",
        "Read the audit trail",
        CapabilityCategory.AUDIT,
    ),
]


CAPABILITY_DEFINITIONS = (
    GENERAL_CAPABILITIES
    + INVENTORY_CAPABILITIES
    + WAREHOUSE_CAPABILITIES
    + PEOPLE_CAPABILITIES
    + AUDIT_CAPABILITIES
)
