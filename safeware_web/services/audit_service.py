# Overview: Read-only audit trail viewer with server-side filtering.

from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Mapping

from ..models import AuditLogEntry
from .api_client import ENVELOPE_AUDIT_LOGS
from .endpoints import AUDIT_LOGS
from .permission_service import CapabilityDeniedError, require_capability
from .view_state import ListState


@dataclass(frozen=True)
class AuditLogFilters:
    action: str = ""
    resource_type: str = ""
    user_id: str = ""
    from_date: str = ""
    to_date: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AuditLogFilters":
        values = {}
        for f in fields(cls):
            raw = data.get(f.name)
            values[f.name] = str(raw).strip() if raw is not None else ""
        return cls(**values)

    def to_params(self) -> dict:
        """Only non-empty filters become query parameters."""
        return {k: v for k, v in asdict(self).items() if v}

    @property
    def is_empty(self) -> bool:
        return not self.to_params()


class AuditLogController:
    """A filtered projection over backend records; nothing here mutates."""

    name = "audit_logs"

    def __init__(self, store):
        require_capability(store.capabilities, "VIEW_AUDIT_LOGS")
        path = AUDIT_LOGS.get(store.role)
        if path is None:
            raise CapabilityDeniedError(f"Role {store.role} has no audit log endpoint")
        self.api = store.api
        self.path = path
        self.filters = AuditLogFilters()
        self.state: ListState = ListState(self.name)

    @property
    def records(self) -> list[AuditLogEntry]:
        return self.state.records

    def _fetch(self) -> list[AuditLogEntry]:
        raw = self.api.fetch_list(self.path, envelope=ENVELOPE_AUDIT_LOGS, params=self.filters.to_params())
        return [AuditLogEntry.from_dict(entry) for entry in raw if isinstance(entry, dict)]

    def fetch(self, filters: AuditLogFilters | None = None) -> ListState:
        if filters is not None:
            self.filters = filters
        self.state.load(self._fetch)
        return self.state

    def reset(self) -> ListState:
        """Clear every filter and refetch, even when nothing was filtered."""
        return self.fetch(AuditLogFilters())
