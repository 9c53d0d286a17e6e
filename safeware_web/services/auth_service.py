# Overview: Login and company registration flows against the backend auth endpoints.

from __future__ import annotations

from ..models import User
from . import endpoints
from .api_client import ApiError


def authenticate(store, email: str, password: str) -> User:
    """
    Exchange credentials for tokens and hand them to the session store.

    Raises ApiError with the server's message on rejection (a 401 here means
    bad credentials, not an expired session).
    """
    response = store.api.create(endpoints.AUTH_LOGIN, {"email": email, "password": password})
    try:
        return store.login(response)
    except ValueError as exc:
        raise ApiError(str(exc)) from exc


def register_company(api, form: dict) -> None:
    """Bootstrap a company and its first Manager account."""
    api.create(
        endpoints.AUTH_REGISTER,
        {
            "company_name": form["company_name"],
            "full_name": form["full_name"],
            "email": form["email"],
            "password": form["password"],
        },
    )
