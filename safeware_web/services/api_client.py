# Overview: The only component that performs network I/O against the inventory API.

"""
API Gateway Client

Every view reaches the backend through ApiClient. The client:
- attaches the current access token as a Bearer Authorization header
- turns every non-2xx answer into ApiError (message + HTTP status)
- turns 401 answers into AuthenticationError so the session can be dropped
- never retries and never de-duplicates; each call is fire-once

List endpoints answer either with a bare JSON array or with an object that
wraps the array under a resource key. normalize_list() is the single place
that knows about that difference.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx


logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Request failed"
NETWORK_ERROR_MESSAGE = "Could not reach the inventory service"

# Envelope key per resource type, for object-wrapped list responses
ENVELOPE_WAREHOUSES = "warehouses"
ENVELOPE_ITEMS = "items"
ENVELOPE_EMPLOYEES = "employees"
ENVELOPE_AUDIT_LOGS = "logs"


class ApiError(Exception):
    """Raised when the backend answers with a non-2xx status or cannot be reached."""

    def __init__(self, message: str | None = None, status: int | None = None, payload: Any = None):
        self.message = message or GENERIC_ERROR_MESSAGE
        self.status = status
        self.payload = payload
        super().__init__(self.message)

    @property
    def is_network_error(self) -> bool:
        return self.status is None


class AuthenticationError(ApiError):
    """Raised on 401: the stored credential is invalid or expired."""


def normalize_list(payload: Any, envelope: str | None = None) -> list:
    """
    Reduce a list response to a plain list.

    - bare list -> itself
    - {"<envelope>": [...]} -> the wrapped list
    - anything else (None, scalar, object without a list) -> []
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and envelope:
        wrapped = payload.get(envelope)
        if isinstance(wrapped, list):
            return wrapped
    return []


def _error_message(payload: Any) -> str | None:
    if isinstance(payload, dict):
        for key in ("error", "message", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return None


def _clean_params(params: dict | None) -> dict | None:
    if not params:
        return None
    cleaned = {k: v for k, v in params.items() if v not in (None, "")}
    return cleaned or None


class ApiClient:
    """Verb-based access to the inventory API for one session."""

    def __init__(self, http: httpx.Client, token_provider: Callable[[], str | None]):
        self._http = http
        self._token_provider = token_provider

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(self, method: str, path: str, *, params: dict | None = None, json: Any = None) -> Any:
        try:
            response = self._http.request(
                method,
                path,
                params=_clean_params(params),
                json=json,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            logger.warning("API %s %s failed: %s", method, path, exc)
            raise ApiError(NETWORK_ERROR_MESSAGE) from exc

        logger.debug("API %s %s -> %s", method, path, response.status_code)

        payload = None
        if response.content:
            try:
                payload = response.json()
            except ValueError:
                payload = None

        if not response.is_success:
            message = _error_message(payload)
            if response.status_code == 401:
                raise AuthenticationError(message or "Session expired", response.status_code, payload)
            raise ApiError(message, response.status_code, payload)

        return payload

    def fetch_list(self, path: str, *, envelope: str | None = None, params: dict | None = None) -> list:
        return normalize_list(self.request("GET", path, params=params), envelope)

    def fetch_one(self, path: str, *, params: dict | None = None) -> Any:
        return self.request("GET", path, params=params)

    def create(self, path: str, payload: dict | None = None) -> Any:
        return self.request("POST", path, json=payload or {})

    def update(self, path: str, payload: dict, *, method: str = "PUT") -> Any:
        if method not in ("PUT", "PATCH", "POST"):
            raise ValueError(f"Unsupported update method: {method}")
        return self.request(method, path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
