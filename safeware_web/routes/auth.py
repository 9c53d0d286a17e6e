# Overview: Login, company signup, logout and the role-based landing redirect.

# safeware_web/routes/auth.py
"""
Authentication pages

A 401 from /auth/login means bad credentials, not an expired session, so it
is handled here and never reaches the app-wide AuthenticationError handler.
"""

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ..decorators import loading_page, flash_field_errors, require_guest
from ..permissions import ROLE_HOME_ENDPOINTS
from ..services import auth_service
from ..services.api_client import ApiError
from ..services.session_service import get_session_store
from ..validation import ValidationError, validate_login_form, validate_register_form


auth_bp = Blueprint("auth", __name__)


def _home_for(role):
    endpoint = ROLE_HOME_ENDPOINTS.get(role)
    return url_for(endpoint) if endpoint else None


def _safe_next(target):
    # Only same-site relative paths
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return None


@auth_bp.get("/")
def landing():
    store = get_session_store()
    if store.is_resolving:
        return loading_page()
    if store.is_authenticated:
        home = _home_for(store.role)
        if home:
            return redirect(home)
        current_app.logger.warning("No home route for role %r; ending session", store.role)
        store.invalidate()
    return redirect(url_for("auth.login"))


@auth_bp.route("/login", methods=["GET", "POST"])
@require_guest
def login():
    errors = {}
    form = {}
    if request.method == "POST":
        form = request.form.to_dict()
        try:
            cleaned = validate_login_form(form)
            store = get_session_store()
            user = auth_service.authenticate(store, cleaned["email"], cleaned["password"])
        except ValidationError as exc:
            errors = exc.errors
            flash_field_errors(errors)
        except ApiError as exc:
            flash(exc.message, "error")
        else:
            flash(f"Welcome back, {user.full_name}!", "success")
            home = _home_for(user.role)
            if home is None:
                store.invalidate()
                flash("Your account has no assigned area", "error")
                return redirect(url_for("auth.login"))
            return redirect(_safe_next(request.args.get("next")) or home)
        form.pop("password", None)

    return render_template("auth/login.html", form=form, errors=errors)


@auth_bp.route("/signup", methods=["GET", "POST"])
@require_guest
def signup():
    errors = {}
    form = {}
    if request.method == "POST":
        form = request.form.to_dict()
        try:
            cleaned = validate_register_form(form)
            auth_service.register_company(get_session_store().api, cleaned)
        except ValidationError as exc:
            errors = exc.errors
            flash_field_errors(errors)
        except ApiError as exc:
            flash(exc.message, "error")
        else:
            flash("Company registered. Sign in to continue.", "success")
            return redirect(url_for("auth.login"))
        form.pop("password", None)

    return render_template("auth/signup.html", form=form, errors=errors)


@auth_bp.post("/logout")
def logout():
    """Always ends the local session, whatever the backend answers."""
    get_session_store().logout()
    flash("You have been signed out", "info")
    return redirect(url_for("auth.login"))
