# Overview: Item view controller; role-specific endpoints, optimistic CRUD over ListState.

"""
Items are listed per role:
- Manager and Auditor list one warehouse at a time
- Supervisor and Staff list "their" warehouse; the backend decides which one

The controller never filters the list itself. Whatever the server returns for
the session is what the view shows.
"""

from __future__ import annotations

from ..models import ITEM_ID_KEYS, Item
from .api_client import ENVELOPE_ITEMS
from .base_controller import EntityController
from .endpoints import ITEM_ENDPOINTS, MANAGER_ALL_ITEMS
from .permission_service import CapabilityDeniedError


def _item_payload(form: dict) -> dict:
    return {
        "sku": form.get("sku", ""),
        "name": form.get("name", ""),
        "quality": form.get("quality", ""),
        "quantity": form.get("quantity", 0),
        "price": form.get("price", 0.0),
        "department": form.get("department", ""),
        "batch": form.get("batch", ""),
    }


def _item_changes(form: dict) -> dict:
    return {
        "sku": form.get("sku") or None,
        "name": form.get("name", ""),
        "quality": form.get("quality") or None,
        "quantity": form.get("quantity", 0),
        "price": form.get("price", 0.0),
        "department": form.get("department") or None,
        "batch": form.get("batch") or None,
    }


def parse_items(raw: list) -> list[Item]:
    return [Item.from_dict(entry) for entry in raw if isinstance(entry, dict)]


def total_value(items) -> float:
    """Sum of quantity * price, always recomputed from the records."""
    return sum(item.total_value for item in items)


class ItemController(EntityController):
    name = "items"
    id_keys = ITEM_ID_KEYS

    def __init__(self, store, warehouse_id: str | None = None, **kwargs):
        super().__init__(store, **kwargs)
        endpoints = ITEM_ENDPOINTS.get(store.role)
        if endpoints is None:
            raise CapabilityDeniedError(f"Role {store.role or 'anonymous'} cannot list items")
        self.endpoints = endpoints
        self.warehouse_id = warehouse_id

    @property
    def read_only(self) -> bool:
        return self.endpoints.read_only or not self.capabilities.can_edit_items

    @property
    def total_value(self) -> float:
        return total_value(self.records)

    def _target_warehouse_id(self) -> str | None:
        if self.warehouse_id:
            return self.warehouse_id
        user = self.store.user
        return user.warehouse_id if user else None

    def _fetch(self) -> list[Item]:
        path = self.endpoints.list_url(self.warehouse_id)
        return parse_items(self.api.fetch_list(path, envelope=ENVELOPE_ITEMS))

    def _require_editable(self) -> None:
        self._require("EDIT_ITEMS")
        if self.endpoints.read_only:
            raise CapabilityDeniedError(f"Role {self.store.role} has read-only item access")

    def create(self, form: dict) -> Item:
        self._require_editable()
        payload = _item_payload(form)
        if self.endpoints.scoped_by_warehouse:
            payload["warehouse_id"] = self.warehouse_id
        record = Item(id="", warehouse_id=self._target_warehouse_id(), **_item_changes(form))
        return self._mutate(
            lambda: self.state.create(record, lambda: self.api.create(self.endpoints.create_path, payload))
        )

    def update(self, item_id: str, form: dict) -> Item | None:
        self._require_editable()
        payload = _item_payload(form)
        return self._mutate(
            lambda: self.state.update(
                item_id,
                _item_changes(form),
                lambda: self.api.update(
                    self.endpoints.update_url(item_id), payload, method=self.endpoints.update_method
                ),
            )
        )

    def delete(self, item_id: str) -> None:
        self._require_editable()
        self._mutate(
            lambda: self.state.delete(item_id, lambda: self.api.delete(self.endpoints.delete_url(item_id)))
        )


def fetch_all_manager_items(api) -> list[Item]:
    return parse_items(api.fetch_list(MANAGER_ALL_ITEMS, envelope=ENVELOPE_ITEMS))
