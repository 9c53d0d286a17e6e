# Overview: Capability system package.
# Re-exports all public APIs so callers import from one place.

from .categories import CapabilityCategory
from .definitions import (
    CAPABILITY_DEFINITIONS,
    GENERAL_CAPABILITIES,
    INVENTORY_CAPABILITIES,
    WAREHOUSE_CAPABILITIES,
    PEOPLE_CAPABILITIES,
    AUDIT_CAPABILITIES,
)
from .roles import ROLE_CAPABILITIES, ROLE_HOME_ENDPOINTS, ROLE_NAVIGATION
from .helpers import (
    get_all_capability_codes,
    get_capabilities_by_category,
    get_capability_definition,
    validate_capability_code,
    get_role_capability_codes,
)

__all__ = [
    "CapabilityCategory",
    "CAPABILITY_DEFINITIONS",
    "GENERAL_CAPABILITIES",
    "INVENTORY_CAPABILITIES",
    "WAREHOUSE_CAPABILITIES",
    "PEOPLE_CAPABILITIES",
    "AUDIT_CAPABILITIES",
    "ROLE_CAPABILITIES",
    "ROLE_HOME_ENDPOINTS",
    "ROLE_NAVIGATION",
    "get_all_capability_codes",
    "get_capabilities_by_category",
    "get_capability_definition",
    "validate_capability_code",
    "get_role_capability_codes",
]
