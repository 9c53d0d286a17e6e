# Overview: Flask extension instances; the shared HTTP connection pool to the inventory API.

from __future__ import annotations

import time

import httpx
from flask import Flask, current_app

from .services.api_client import ApiClient


class ApiGateway:
    """
    Owns one httpx.Client per application.

    Views never hold the client directly; they ask for an ApiClient bound to
    the current session's token provider.
    """

    def __init__(self, app: Flask | None = None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        # Built on first use so config changes made after create_app() still apply
        app.extensions["api_gateway"] = None

    @staticmethod
    def _http() -> httpx.Client:
        http = current_app.extensions.get("api_gateway")
        if http is None:
            config = current_app.config
            http = httpx.Client(
                base_url=config["API_BASE_URL"],
                timeout=config.get("API_TIMEOUT", 15.0),
                transport=config.get("API_TRANSPORT"),
            )
            current_app.extensions["api_gateway"] = http
        return http

    def client(self, token_provider) -> ApiClient:
        return ApiClient(self._http(), token_provider)

    def check_backend(self) -> dict:
        """Ping the backend health URL and report status plus latency."""
        url = current_app.config["BACKEND_HEALTH_URL"]
        start_time = time.time()
        try:
            response = self._http().get(url)
            elapsed_ms = (time.time() - start_time) * 1000
            return {
                "status": "healthy" if response.is_success else "unhealthy",
                "http_status": response.status_code,
                "latency_ms": round(elapsed_ms, 2),
            }
        except httpx.HTTPError:
            elapsed_ms = (time.time() - start_time) * 1000
            current_app.logger.exception("Backend health check failed")
            return {
                "status": "unreachable",
                "latency_ms": round(elapsed_ms, 2),
                "error": "Backend unreachable",
            }


api_gateway = ApiGateway()
