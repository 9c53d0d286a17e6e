# Overview: Common mount/refresh/mutation plumbing for entity view controllers.

from __future__ import annotations

import logging
from typing import Any, Callable

from ..models import ID_KEYS
from .api_client import ApiError, AuthenticationError
from .permission_service import require_capability
from .view_state import ListState, StaleRecordError, ensure_persisted


logger = logging.getLogger(__name__)


class EntityController:
    """
    A view over one entity collection for one session.

    Subclasses implement _fetch() and call _mutate() for create/update/delete.
    The session store is injected; controllers never reach for globals.
    """

    name = "entities"
    id_keys = ID_KEYS

    def __init__(self, store, *, refresh_after_mutation: bool = False):
        self.store = store
        self.api = store.api
        self.capabilities = store.capabilities
        self.refresh_after_mutation = refresh_after_mutation
        self.state: ListState = ListState(self.name, id_keys=self.id_keys)

    @property
    def records(self) -> list:
        return self.state.records

    def _fetch(self) -> list:
        raise NotImplementedError

    def mount(self) -> ListState:
        self.state.load(self._fetch)
        return self.state

    def unmount(self) -> None:
        self.state.unmount()

    def get(self, record_id: str):
        """A record from the current list; placeholder or vanished ids are refused."""
        ensure_persisted(record_id)
        record = self.state.find(record_id)
        if record is None:
            raise StaleRecordError("This record no longer exists; refresh and try again")
        return record

    def refresh(self) -> ListState:
        """Refetch and let server data replace every local patch."""
        self.state.reconcile(self._fetch())
        return self.state

    def _require(self, code: str) -> None:
        require_capability(self.capabilities, code)

    def _after_mutation(self) -> None:
        if not self.refresh_after_mutation:
            return
        try:
            self.refresh()
        except AuthenticationError:
            raise
        except ApiError as exc:
            # The mutation itself succeeded; keep the optimistic list
            logger.warning("Refresh after %s mutation failed: %s", self.name, exc)

    def _mutate(self, action: Callable[[], Any]) -> Any:
        result = action()
        self._after_mutation()
        return result
