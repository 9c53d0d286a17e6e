# Overview: Route guards; role and capability checks ahead of every protected view.

from functools import wraps

from flask import current_app, flash, redirect, render_template, request, url_for

from .services import permission_service
from .services.session_service import get_session_store


def loading_page():
    return render_template("loading.html"), 200


def require_role(*roles: str):
    """
    Guard a view with a required-role set.

    Evaluation order (UX gate; the backend enforces the real policy):
    1. identity still resolving  -> neutral loading page, no redirect decision
    2. no identity               -> redirect to the login page
    3. role not in `roles`       -> silent redirect to the landing route

    On success the view runs with g.session_store populated.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            store = get_session_store()

            # Resolution finishes inside get_session_store(), so this only
            # shows for a store that has not resolved yet
            if store.is_resolving:
                return loading_page()

            if not store.is_authenticated:
                return redirect(url_for("auth.login", next=request.path))

            if store.role not in roles:
                current_app.logger.info(
                    "Role %s redirected away from %s", store.role, request.path
                )
                return redirect(url_for("auth.landing"))

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def require_capability(code: str):
    """
    Require a capability from the session's capability set.

    Must run after @require_role. A missing capability redirects to the
    landing route with no error, like a role mismatch.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            store = get_session_store()
            if not store.is_authenticated:
                return redirect(url_for("auth.login"))

            try:
                permission_service.require_capability(store.capabilities, code)
            except permission_service.CapabilityDeniedError:
                current_app.logger.info(
                    "Role %s lacks %s for %s", store.role, code, request.path
                )
                return redirect(url_for("auth.landing"))

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def require_guest(f):
    """Send an already-authenticated session to its home instead of the auth pages."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        store = get_session_store()
        if store.is_authenticated:
            return redirect(url_for("auth.landing"))
        return f(*args, **kwargs)
    return decorated_function


def flash_field_errors(errors: dict) -> None:
    """Form-level messages become notifications; field messages render inline."""
    message = errors.get("__all__")
    if message:
        flash(message, "error")
