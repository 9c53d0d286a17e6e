# safeware_web/config.py
from __future__ import annotations
import os


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Signs the session cookie that carries the two credential strings
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # External inventory API (all business data lives behind it)
    API_BASE_URL = os.environ.get(
        "API_BASE_URL",
        "http://localhost:8080/api/v1",
    )
    BACKEND_HEALTH_URL = os.environ.get(
        "BACKEND_HEALTH_URL",
        "http://localhost:8080/health",
    )
    API_TIMEOUT = float(os.environ.get("API_TIMEOUT", "15"))

    # Optional httpx transport override (tests inject an httpx.MockTransport)
    API_TRANSPORT = None

    # Reconcile list views with a full refetch after every successful mutation
    REFRESH_AFTER_MUTATION = _env_bool("REFRESH_AFTER_MUTATION")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
