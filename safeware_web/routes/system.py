# safeware_web/routes/system.py
"""
Health and version endpoints.

The frontend owns no data of its own, so health is the frontend process plus
reachability of the inventory API.
"""

import sys
import time

from flask import Blueprint, current_app

from ..extensions import api_gateway
from ..time_utils import utcnow

system_bp = Blueprint("system", __name__)

APP_VERSION = "1.0.0"


@system_bp.get("/health")
def health():
    """
    Returns:
    - 200: frontend up and backend healthy
    - 503: backend unhealthy or unreachable

    The check is unauthenticated and never touches the session.
    """
    start_time = time.time()
    backend_health = api_gateway.check_backend()

    if backend_health["status"] == "healthy":
        overall_status = "healthy"
        http_status = 200
    else:
        overall_status = "degraded"
        http_status = 503

    total_elapsed_ms = (time.time() - start_time) * 1000

    return {
        "status": overall_status,
        "timestamp": utcnow().isoformat() + "Z",
        "total_latency_ms": round(total_elapsed_ms, 2),
        "checks": {
            "frontend": {"status": "healthy"},
            "backend": backend_health,
        },
    }, http_status


@system_bp.get("/version")
def version():
    """Non-sensitive deployment info; never exposes the secret key or API URL."""
    env = "production" if not current_app.debug else "development"
    return {
        "app_version": APP_VERSION,
        "environment": env,
        "python_version": sys.version.split()[0],
        "server_time": utcnow().isoformat() + "Z",
    }
