# safeware_web/__init__.py
from flask import Flask, flash, redirect, render_template, url_for

from .config import Config
from .extensions import api_gateway
from .services.api_client import ApiError, AuthenticationError
from .services.permission_service import navigation_for
from .services.session_service import get_session_store, handle_authentication_error
from .time_utils import format_timestamp


def create_app() -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    api_gateway.init_app(app)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.manager import manager_bp
    from .routes.supervisor import supervisor_bp
    from .routes.staff import staff_bp
    from .routes.auditor import auditor_bp
    from .routes.common import unmount_all

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(manager_bp)
    app.register_blueprint(supervisor_bp)
    app.register_blueprint(staff_bp)
    app.register_blueprint(auditor_bp)

    # Late callbacks must not write into a finished view
    app.teardown_request(unmount_all)

    @app.errorhandler(AuthenticationError)
    def session_expired(exc):
        # Any 401 is terminal for the session; there is no token refresh
        handle_authentication_error(exc)
        app.logger.info("Session invalidated after 401: %s", exc.message)
        flash("Your session has expired. Please sign in again.", "error")
        return redirect(url_for("auth.login"))

    @app.errorhandler(ApiError)
    def api_unavailable(exc):
        app.logger.warning("Unhandled API error (%s): %s", exc.status, exc.message)
        return render_template("error.html", message=exc.message), 502

    @app.context_processor
    def inject_session():
        store = get_session_store()
        capabilities = store.capabilities
        return {
            "session_store": store,
            "current_user": store.user,
            "capabilities": capabilities,
            "navigation": navigation_for(capabilities),
        }

    app.add_template_filter(format_timestamp, "timestamp")

    @app.template_filter("money")
    def money(value):
        return f"{value or 0:,.2f}"

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
