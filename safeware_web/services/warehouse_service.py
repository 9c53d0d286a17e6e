from __future__ import annotations

from ..models import WAREHOUSE_ID_KEYS, Warehouse
from .api_client import ENVELOPE_WAREHOUSES
from .base_controller import EntityController
from .endpoints import WAREHOUSE_LIST, WAREHOUSE_CREATE, WAREHOUSE_UPDATE, WAREHOUSE_DELETE
from .permission_service import CapabilityDeniedError


def parse_warehouses(raw: list) -> list[Warehouse]:
    return [Warehouse.from_dict(entry) for entry in raw if isinstance(entry, dict)]


class WarehouseController(EntityController):
    """Manager CRUD over warehouses; Auditor gets the same list read-only."""

    name = "warehouses"
    id_keys = WAREHOUSE_ID_KEYS

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        path = WAREHOUSE_LIST.get(store.role)
        if path is None:
            raise CapabilityDeniedError(f"Role {store.role or 'anonymous'} cannot list warehouses")
        self.list_path = path

    @property
    def read_only(self) -> bool:
        return not self.capabilities.can_manage_warehouses

    def _fetch(self) -> list[Warehouse]:
        return parse_warehouses(self.api.fetch_list(self.list_path, envelope=ENVELOPE_WAREHOUSES))

    def find(self, warehouse_id: str) -> Warehouse | None:
        return self.state.find(warehouse_id)

    def names_by_id(self) -> dict[str, str]:
        return {w.id: w.name for w in self.records}

    def create(self, form: dict) -> Warehouse:
        self._require("MANAGE_WAREHOUSES")
        record = Warehouse(
            id="",
            name=form["name"],
            location=form["location"],
            capacity=form.get("capacity"),
        )
        return self._mutate(
            lambda: self.state.create(record, lambda: self.api.create(WAREHOUSE_CREATE, dict(form)))
        )

    def update(self, warehouse_id: str, form: dict) -> Warehouse | None:
        self._require("MANAGE_WAREHOUSES")
        path = WAREHOUSE_UPDATE.format(warehouse_id=warehouse_id)
        return self._mutate(
            lambda: self.state.update(
                warehouse_id,
                dict(form),
                lambda: self.api.update(path, dict(form), method="PATCH"),
            )
        )

    def delete(self, warehouse_id: str) -> None:
        self._require("MANAGE_WAREHOUSES")
        path = WAREHOUSE_DELETE.format(warehouse_id=warehouse_id)
        self._mutate(lambda: self.state.delete(warehouse_id, lambda: self.api.delete(path)))
