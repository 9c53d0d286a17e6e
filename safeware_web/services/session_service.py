# Overview: Session Store; the single owner of "who is logged in" for a request.

"""
Session Store with an explicit lifecycle

WHY: Identity and credentials have exactly one writer. Views receive the
store (and the capability set it resolves) instead of reading globals.

Lifecycle:
    UNKNOWN -> RESOLVING -> AUTHENTICATED(role) | UNAUTHENTICATED
    AUTHENTICATED -> UNAUTHENTICATED   (logout, or any 401 from the backend)

Persisted state is limited to two credential strings stored under the keys
"access_token" and "refresh_token" of a mapping (the signed Flask session
cookie in the running app, a plain dict in unit tests). The identity itself
is never persisted; it is re-resolved through GET /users/me.

There is no refresh-token rotation: a 401 ends the session.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, MutableMapping

from flask import g, session

from ..extensions import api_gateway
from ..models import User, LoginResponse
from . import endpoints
from .api_client import ApiClient, ApiError, AuthenticationError
from .permission_service import CapabilitySet, resolve_capabilities


logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"


class SessionStatus(str, Enum):
    UNKNOWN = "unknown"
    RESOLVING = "resolving"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class SessionStore:
    """
    Holds the current identity and the credentials needed to call the backend.

    api_factory builds an ApiClient from a token provider; the store hands its
    own token getter to it so every call carries the current credential.
    """

    def __init__(self, storage: MutableMapping, api_factory: Callable[[Callable[[], str | None]], ApiClient]):
        self._storage = storage
        self._user: User | None = None
        self._capabilities: CapabilitySet | None = None
        self.status = SessionStatus.UNKNOWN
        self.api = api_factory(self.get_access_token)

    # -- read side -------------------------------------------------------

    def get_access_token(self) -> str | None:
        return self._storage.get(ACCESS_TOKEN_KEY)

    def get_refresh_token(self) -> str | None:
        return self._storage.get(REFRESH_TOKEN_KEY)

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def role(self) -> str | None:
        return self._user.role if self._user else None

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED and self._user is not None

    @property
    def is_resolving(self) -> bool:
        return self.status in (SessionStatus.UNKNOWN, SessionStatus.RESOLVING)

    @property
    def capabilities(self) -> CapabilitySet:
        """Resolved once per session from the role; empty when logged out."""
        if self._capabilities is None:
            self._capabilities = resolve_capabilities(self.role)
        return self._capabilities

    # -- write side ------------------------------------------------------

    def resolve(self) -> SessionStatus:
        """
        Turn a persisted access token into an identity.

        Any failure (401, network, malformed profile) clears all credential
        material: a token that cannot be resolved is treated as invalid.
        """
        if self.is_authenticated:
            return self.status

        if not self.get_access_token():
            self._set_identity(None)
            return self.status

        self.status = SessionStatus.RESOLVING
        try:
            profile = self.api.fetch_one(endpoints.USERS_ME)
            if not isinstance(profile, dict):
                raise ApiError("Malformed profile response")
            user = User.from_dict(profile)
            if not user.role:
                raise ApiError("Profile has no role")
        except ApiError as exc:
            logger.info("Failed to resolve session from stored token: %s", exc)
            self._clear_credentials()
            self._set_identity(None)
            return self.status

        self._set_identity(user)
        return self.status

    def login(self, data: LoginResponse | dict) -> User:
        """Persist both tokens and the returned identity in one step."""
        response = data if isinstance(data, LoginResponse) else LoginResponse.from_dict(data)
        self._storage[ACCESS_TOKEN_KEY] = response.access_token
        if response.refresh_token:
            self._storage[REFRESH_TOKEN_KEY] = response.refresh_token
        else:
            self._storage.pop(REFRESH_TOKEN_KEY, None)
        self._set_identity(response.user)
        return response.user

    def logout(self) -> None:
        """
        Log out locally no matter what the network does.

        The backend is told first (it needs the token), but credentials and
        identity are cleared in the finally block so a failed or timed-out
        call can never leave the user logged in.
        """
        try:
            if self.get_access_token():
                self.api.create(endpoints.AUTH_LOGOUT)
        except ApiError as exc:
            logger.warning("Backend logout failed: %s", exc)
        finally:
            self._clear_credentials()
            self._set_identity(None)

    def invalidate(self) -> None:
        """Drop the session after the backend rejected the credential."""
        self._clear_credentials()
        self._set_identity(None)

    def _set_identity(self, user: User | None) -> None:
        self._user = user
        self._capabilities = None
        self.status = SessionStatus.AUTHENTICATED if user else SessionStatus.UNAUTHENTICATED

    def _clear_credentials(self) -> None:
        self._storage.pop(ACCESS_TOKEN_KEY, None)
        self._storage.pop(REFRESH_TOKEN_KEY, None)


# =============================================================================
# FLASK INTEGRATION
# =============================================================================


def load_session_store() -> SessionStore:
    """Create and resolve the store for the current request on first use."""
    store = SessionStore(session, api_gateway.client)
    g.session_store = store
    store.resolve()
    return store


def get_session_store() -> SessionStore:
    store = getattr(g, "session_store", None)
    if store is None:
        store = load_session_store()
    return store


def handle_authentication_error(exc: AuthenticationError) -> None:
    """Any 401 during a request is terminal for the session."""
    store = getattr(g, "session_store", None)
    if store is not None:
        store.invalidate()
    else:
        session.pop(ACCESS_TOKEN_KEY, None)
        session.pop(REFRESH_TOKEN_KEY, None)
