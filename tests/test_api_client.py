# SafeWare Web Tests - API Gateway Client
#
# Tests for:
# - List envelope normalisation
# - Error translation (server message, generic fallback, 401, network)
# - Bearer token attachment and query parameter cleaning

import httpx
import pytest

from safeware_web.services.api_client import (
    ApiClient,
    ApiError,
    AuthenticationError,
    GENERIC_ERROR_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    normalize_list,
)

from tests.conftest import API_BASE_URL, FakeBackend


def make_client(backend: FakeBackend, token="tok-1") -> ApiClient:
    http = httpx.Client(base_url=API_BASE_URL, transport=httpx.MockTransport(backend.handler))
    return ApiClient(http, lambda: token)


# =============================================================================
# ENVELOPE NORMALISATION
# =============================================================================


class TestNormalizeList:
    """Bare arrays and object-wrapped arrays reduce to the same list."""

    def test_bare_list_passes_through(self):
        assert normalize_list([{"id": "1"}], "warehouses") == [{"id": "1"}]

    def test_wrapped_list_is_unwrapped(self):
        payload = {"warehouses": [{"id": "1"}, {"id": "2"}], "total": 2}
        assert normalize_list(payload, "warehouses") == [{"id": "1"}, {"id": "2"}]

    def test_wrong_envelope_key_gives_empty_list(self):
        assert normalize_list({"items": [{"id": "1"}]}, "warehouses") == []

    @pytest.mark.parametrize("payload", [None, "nope", 42, {}, {"logs": None}, {"logs": "x"}])
    def test_anything_else_gives_empty_list(self, payload):
        assert normalize_list(payload, "logs") == []

    def test_same_records_either_shape(self):
        records = [{"id": "a"}, {"id": "b"}]
        assert normalize_list(records, "items") == normalize_list({"items": records}, "items")


# =============================================================================
# ERRORS
# =============================================================================


class TestApiErrors:
    """Non-2xx answers become ApiError with the server's message."""

    def test_server_error_message_is_kept(self):
        backend = FakeBackend()
        backend.fail("POST", "/manager/item/create", status=400, error="SKU already exists")
        client = make_client(backend)

        with pytest.raises(ApiError) as exc_info:
            client.create("/manager/item/create", {"sku": "A1"})

        assert exc_info.value.message == "SKU already exists"
        assert exc_info.value.status == 400
        assert not isinstance(exc_info.value, AuthenticationError)

    def test_message_field_is_used_when_error_missing(self):
        backend = FakeBackend()
        backend.on("GET", "/auditor/warehouses", {"message": "Maintenance"}, status=503)

        with pytest.raises(ApiError) as exc_info:
            make_client(backend).fetch_list("/auditor/warehouses", envelope="warehouses")

        assert exc_info.value.message == "Maintenance"

    def test_generic_fallback_without_server_message(self):
        backend = FakeBackend()
        backend.on("DELETE", "/staff/item/remove/i-1", None, status=500)

        with pytest.raises(ApiError) as exc_info:
            make_client(backend).delete("/staff/item/remove/i-1")

        assert exc_info.value.message == GENERIC_ERROR_MESSAGE

    def test_401_raises_authentication_error(self):
        backend = FakeBackend()
        backend.fail("GET", "/staff/items", status=401, error="Token expired")

        with pytest.raises(AuthenticationError) as exc_info:
            make_client(backend).fetch_list("/staff/items", envelope="items")

        assert exc_info.value.status == 401

    def test_network_failure_is_api_error_without_status(self):
        backend = FakeBackend()
        backend.unreachable = True

        with pytest.raises(ApiError) as exc_info:
            make_client(backend).fetch_one("/users/me")

        assert exc_info.value.is_network_error
        assert exc_info.value.message == NETWORK_ERROR_MESSAGE

    def test_no_retry_after_failure(self):
        backend = FakeBackend()
        backend.fail("POST", "/staff/item/add", status=500)

        with pytest.raises(ApiError):
            make_client(backend).create("/staff/item/add", {"name": "Widget"})

        assert len(backend.calls_to("POST", "/staff/item/add")) == 1


# =============================================================================
# REQUESTS
# =============================================================================


class TestRequests:
    """Headers, params and verbs."""

    def test_bearer_token_attached(self):
        backend = FakeBackend()
        make_client(backend, token="secret-token").fetch_list("/staff/items")

        assert backend.calls[0].authorization == "Bearer secret-token"

    def test_no_authorization_header_without_token(self):
        backend = FakeBackend()
        make_client(backend, token=None).create("/auth/register", {"email": "a@b.co"})

        assert backend.calls[0].authorization is None

    def test_empty_params_are_dropped(self):
        backend = FakeBackend()
        make_client(backend).fetch_list(
            "/manager/audit-logs", envelope="logs", params={"action": "CREATE", "resource_type": "", "user_id": None}
        )

        assert backend.calls[0].params == {"action": "CREATE"}

    def test_update_uses_requested_method(self):
        backend = FakeBackend()
        make_client(backend).update("/manager/warehouse/update/wh-1", {"name": "North"}, method="PATCH")

        assert backend.calls_to("PATCH", "/manager/warehouse/update/wh-1")[0].body == {"name": "North"}

    def test_update_rejects_unknown_method(self):
        with pytest.raises(ValueError):
            make_client(FakeBackend()).update("/x", {}, method="DELETE")
