# Overview: Local list state shared by every entity view; optimistic patches with rollback.

"""
Optimistic list state

Each open view keeps a transient copy of the records it last fetched. Mutating
actions patch that copy so the result is visible before the next full refetch.

Rules every mutation follows:
- snapshot the list before dispatching the API call
- apply the optimistic patch
- on any failure restore the snapshot and re-raise, so the caller can notify
  the user; the list never keeps a ghost entry or loses a row that still
  exists on the server

Records created locally get a placeholder id ("temp-<n>") until the server
returns the real one. Placeholders are never sent to the backend and vanish on
the next reconcile() with server data.

Writes that arrive after unmount() are ignored.
"""

from __future__ import annotations

import hashlib
import itertools
import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Callable, Generic, Iterable, TypeVar

from ..models import ID_KEYS, extract_id
from .api_client import ApiError, AuthenticationError


logger = logging.getLogger(__name__)

T = TypeVar("T")

PLACEHOLDER_PREFIX = "temp-"


class PlaceholderIdError(ValueError):
    """Raised when an action targets a record that only exists locally."""


class StaleRecordError(LookupError):
    """Raised when an action targets a record missing from the freshly fetched list."""


class SubmissionInProgressError(Exception):
    """Raised when a control submits again while its previous call is outstanding."""


# =============================================================================
# PLACEHOLDER IDS
# =============================================================================


class PlaceholderIds:
    """Arena of temporary identifiers; unique within the process, never persisted."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            return f"{PLACEHOLDER_PREFIX}{next(self._counter)}"


placeholder_ids = PlaceholderIds()


def is_placeholder(record_id: Any) -> bool:
    return isinstance(record_id, str) and record_id.startswith(PLACEHOLDER_PREFIX)


def ensure_persisted(record_id: str) -> None:
    if not record_id or is_placeholder(record_id):
        raise PlaceholderIdError("This record has not been synchronised yet; refresh and try again")


# =============================================================================
# LIST STATE
# =============================================================================


class ListState(Generic[T]):
    """Records of one view. Records are dataclasses with an `id` field."""

    def __init__(self, name: str, records: Iterable[T] | None = None, id_keys: tuple[str, ...] = ID_KEYS):
        self.name = name
        self.id_keys = id_keys
        self.records: list[T] = list(records or [])
        self.error: str | None = None
        self.loaded = False
        self.mounted = True

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def unmount(self) -> None:
        self.mounted = False

    def _write(self, records: list[T]) -> bool:
        if not self.mounted:
            logger.debug("Ignoring write to unmounted view %s", self.name)
            return False
        self.records = records
        return True

    def find(self, record_id: str) -> T | None:
        for record in self.records:
            if getattr(record, "id", None) == record_id:
                return record
        return None

    def snapshot(self) -> list[T]:
        return list(self.records)

    def restore(self, snapshot: list[T]) -> None:
        self._write(list(snapshot))

    # -- server sync -----------------------------------------------------

    def load(self, fetch: Callable[[], Iterable[T]]) -> list[T]:
        """
        Replace the records with a fresh fetch.

        A failed fetch degrades the view to an empty list with an error; an
        AuthenticationError still propagates so the session can be dropped.
        """
        try:
            records = list(fetch())
        except AuthenticationError:
            raise
        except ApiError as exc:
            logger.info("Loading %s failed: %s", self.name, exc)
            self.error = exc.message
            self._write([])
            self.loaded = True
            return self.records

        self.error = None
        self._write(records)
        self.loaded = True
        return self.records

    def reconcile(self, records: Iterable[T]) -> list[T]:
        """Server data wins; placeholder records are dropped with everything else."""
        self.error = None
        self._write(list(records))
        self.loaded = True
        return self.records

    # -- optimistic mutations --------------------------------------------

    def create(self, record: T, call: Callable[[], Any], *, keys: tuple[str, ...] | None = None) -> T:
        """Append under a placeholder; adopt the id only from this resource's own keys."""
        snapshot = self.snapshot()
        pending = replace(record, id=placeholder_ids.next())
        self._write(self.records + [pending])
        try:
            response = call()
        except Exception:
            self.restore(snapshot)
            raise

        server_id = extract_id(response, keys or self.id_keys)
        created = replace(pending, id=server_id) if server_id else pending
        self._write([created if r is pending else r for r in self.records])
        return created

    def update(self, record_id: str, changes: dict, call: Callable[[], Any]) -> T | None:
        ensure_persisted(record_id)
        snapshot = self.snapshot()
        current = self.find(record_id)
        patched = replace(current, **changes) if current is not None else None
        if patched is not None:
            self._write([patched if r is current else r for r in self.records])
        try:
            call()
        except Exception:
            self.restore(snapshot)
            raise
        return patched

    def delete(self, record_id: str, call: Callable[[], Any]) -> None:
        ensure_persisted(record_id)
        snapshot = self.snapshot()
        self._write([r for r in self.records if getattr(r, "id", None) != record_id])
        try:
            call()
        except Exception:
            self.restore(snapshot)
            raise


# =============================================================================
# SUBMISSION GATE
# =============================================================================


class SubmissionGate:
    """
    One outstanding mutating call per (session, control).

    Not a queue: a second submission while the first is in flight is refused.
    """

    def __init__(self):
        self._active: set[tuple[str, str]] = set()
        self._lock = threading.Lock()

    @staticmethod
    def session_key(token: str | None) -> str:
        if not token:
            return "anonymous"
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def is_active(self, token: str | None, control: str) -> bool:
        with self._lock:
            return (self.session_key(token), control) in self._active

    @contextmanager
    def hold(self, token: str | None, control: str):
        key = (self.session_key(token), control)
        with self._lock:
            if key in self._active:
                raise SubmissionInProgressError("This action is already in progress")
            self._active.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._active.discard(key)


submission_gate = SubmissionGate()
