# Overview: Resolves a role into the capability set every view consults.

"""
Capability sets

WHY: Views ask "may this session edit items?" instead of comparing role
strings. The mapping lives in one place (permissions.ROLE_CAPABILITIES) and
is resolved once per session.

This is a UX gate only. The backend enforces the authoritative policy; a
capability the client believes it has can still be refused with 403.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..permissions import ROLE_NAVIGATION, get_role_capability_codes, validate_capability_code


MUTATING_CAPABILITIES = frozenset({"EDIT_ITEMS", "MANAGE_WAREHOUSES", "MANAGE_EMPLOYEES"})


class CapabilityDeniedError(Exception):
    """Raised when a session lacks a capability required by an action."""
    pass


@dataclass(frozen=True)
class CapabilitySet:
    role: str | None
    codes: frozenset

    def has(self, code: str) -> bool:
        return code in self.codes

    def has_any(self, *codes: str) -> bool:
        return any(code in self.codes for code in codes)

    @property
    def read_only(self) -> bool:
        return self.has("READ_ONLY") or not self.has_any(*MUTATING_CAPABILITIES)

    @property
    def can_edit_items(self) -> bool:
        return self.has("EDIT_ITEMS") and not self.has("READ_ONLY")

    @property
    def can_manage_warehouses(self) -> bool:
        return self.has("MANAGE_WAREHOUSES") and not self.has("READ_ONLY")

    @property
    def can_manage_employees(self) -> bool:
        return self.has("MANAGE_EMPLOYEES") and not self.has("READ_ONLY")

    @property
    def can_view_audit_logs(self) -> bool:
        return self.has("VIEW_AUDIT_LOGS")

    @property
    def can_view_warehouses(self) -> bool:
        return self.has("VIEW_WAREHOUSES")

    @property
    def can_view_team(self) -> bool:
        return self.has("VIEW_TEAM")


EMPTY_CAPABILITIES = CapabilitySet(role=None, codes=frozenset())


def resolve_capabilities(role: str | None) -> CapabilitySet:
    if not role:
        return EMPTY_CAPABILITIES
    return CapabilitySet(role=role, codes=frozenset(get_role_capability_codes(role)))


def require_capability(capabilities: CapabilitySet, code: str) -> None:
    """
    Raise CapabilityDeniedError unless the set grants code.

    Unknown codes are a programming error and raise ValueError.
    """
    if not validate_capability_code(code):
        raise ValueError(f"Unknown capability code: {code}")
    if not capabilities.has(code):
        raise CapabilityDeniedError(f"Role {capabilities.role or 'anonymous'} lacks {code}")
    # A read-only session never reaches a mutating call, whatever else it holds
    if code in MUTATING_CAPABILITIES and capabilities.has("READ_ONLY"):
        raise CapabilityDeniedError(f"Role {capabilities.role} is read-only")


def navigation_for(capabilities: CapabilitySet) -> list[dict]:
    """Menu entries for the session's role, filtered by what the set grants."""
    entries = ROLE_NAVIGATION.get(capabilities.role, [])
    return [
        {"label": label, "endpoint": endpoint}
        for label, endpoint, code in entries
        if capabilities.has(code)
    ]
