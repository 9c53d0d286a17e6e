# SafeWare Web Tests - Item Views
#
# Tests for:
# - Total value rendering (quantity * price, two decimals)
# - Optimistic delete, create and update with rollback on failure
# - Validation before any network call
# - Read-only Auditor views and the per-control submission gate

import pytest

from safeware_web.services.permission_service import CapabilitySet
from safeware_web.services.view_state import SubmissionGate, submission_gate

from tests.conftest import page_text, token_for


WIDGET = {
    "id": "i-1",
    "sku": "WID-1",
    "name": "Widget",
    "quality": "New",
    "quantity": 5,
    "price": 2.5,
    "warehouse_id": "wh-1",
}
GADGET = {
    "id": "i-2",
    "sku": "GAD-1",
    "name": "Gadget",
    "quality": "Used",
    "quantity": 2,
    "price": 10,
    "warehouse_id": "wh-1",
}

VALID_ITEM = {
    "sku": "SPR-1",
    "name": "Sprocket",
    "quality": "New",
    "quantity": "3",
    "price": "4.00",
}


@pytest.fixture
def staff_items(backend, login_as):
    login_as("Staff")
    backend.on("GET", "/staff/items", [WIDGET, GADGET])
    return backend


class TestItemDisplay:
    @pytest.mark.smoke
    def test_total_value_is_quantity_times_price(self, client, staff_items):
        text = page_text(client.get("/staff/dashboard"))

        assert '<dd class="item-total">12.50</dd>' in text
        assert '<dd class="item-total">20.00</dd>' in text
        # Inventory total recomputed from the records: 12.50 + 20.00
        assert "32.50" in text

    def test_wrapped_list_response_renders_the_same(self, client, backend, login_as):
        login_as("Staff")
        backend.on("GET", "/staff/items", {"items": [WIDGET, GADGET], "count": 2})

        text = page_text(client.get("/staff/dashboard"))

        assert 'data-item-id="i-1"' in text
        assert 'data-item-id="i-2"' in text

    def test_failed_fetch_degrades_to_empty_view(self, client, backend, login_as):
        login_as("Staff")
        backend.fail("GET", "/staff/items", status=500, error="Database unavailable")

        response = client.get("/staff/dashboard")

        assert response.status_code == 200
        text = page_text(response)
        assert "Database unavailable" in text
        assert "No items yet." in text


class TestItemDelete:
    @pytest.mark.smoke
    def test_deleted_item_is_gone_from_the_response(self, client, staff_items):
        response = client.post("/staff/items/i-1/delete")

        text = page_text(response)
        assert response.status_code == 200
        assert 'data-item-id="i-1"' not in text
        assert 'data-item-id="i-2"' in text
        assert "Item deleted successfully" in text
        assert len(staff_items.calls_to("DELETE", "/staff/item/remove/i-1")) == 1
        # Rendered from local state: no refetch after the delete
        assert len(staff_items.calls_to("GET", "/staff/items")) == 1

    def test_failed_delete_keeps_the_row(self, client, staff_items):
        staff_items.fail("DELETE", "/staff/item/remove/i-1", status=403, error="Not allowed")

        text = page_text(client.post("/staff/items/i-1/delete"))

        assert 'data-item-id="i-1"' in text
        assert "Not allowed" in text

    def test_placeholder_id_is_never_sent(self, client, staff_items):
        text = page_text(client.post("/staff/items/temp-7/delete"))

        assert "refresh and try again" in text
        assert staff_items.mutating_calls() == []


class TestItemCreate:
    def test_create_appends_with_server_id(self, client, staff_items):
        staff_items.on("POST", "/staff/item/add", {"id": "i-9"}, status=201)

        text = page_text(client.post("/staff/items/create", data=VALID_ITEM))

        assert 'data-item-id="i-9"' in text
        assert "Sprocket" in text
        call = staff_items.calls_to("POST", "/staff/item/add")[0]
        assert call.body["quantity"] == 3
        assert call.body["price"] == 4.0
        assert "warehouse_id" not in call.body

    def test_failed_create_leaves_list_unchanged(self, client, staff_items):
        staff_items.fail("POST", "/staff/item/add", status=400, error="SKU already exists")

        text = page_text(client.post("/staff/items/create", data=VALID_ITEM))

        assert "SKU already exists" in text
        assert text.count('class="item-card"') == 2
        assert "temp-" not in text

    def test_invalid_form_makes_no_call(self, client, staff_items):
        text = page_text(client.post("/staff/items/create", data={**VALID_ITEM, "quantity": "-1"}))

        assert staff_items.mutating_calls() == []
        assert 'data-field="quantity"' in text
        assert text.count('class="item-card"') == 2

    def test_create_without_returned_id_uses_placeholder(self, client, staff_items):
        staff_items.on("POST", "/staff/item/add", {"message": "created"}, status=201)

        text = page_text(client.post("/staff/items/create", data=VALID_ITEM))

        assert 'data-item-id="temp-' in text

    def test_echoed_warehouse_id_is_not_taken_as_item_id(self, client, staff_items):
        staff_items.on("POST", "/staff/item/add", {"message": "Item added", "warehouse_id": "wh-1"}, status=201)

        text = page_text(client.post("/staff/items/create", data=VALID_ITEM))

        assert 'data-item-id="wh-1"' not in text
        assert 'data-item-id="temp-' in text

    def test_item_id_key_is_adopted(self, client, staff_items):
        staff_items.on("POST", "/staff/item/add", {"item_id": "i-7", "warehouse_id": "wh-1"}, status=201)

        text = page_text(client.post("/staff/items/create", data=VALID_ITEM))

        assert 'data-item-id="i-7"' in text

    def test_resubmitting_after_completion_creates_again(self, client, staff_items):
        # Pages are rendered straight from the POST; only an in-flight call is gated
        client.post("/staff/items/create", data=VALID_ITEM)
        client.post("/staff/items/create", data=VALID_ITEM)

        assert len(staff_items.calls_to("POST", "/staff/item/add")) == 2


class TestItemUpdate:
    def test_update_patches_row(self, client, staff_items):
        form = {**VALID_ITEM, "sku": "WID-1", "name": "Widget XL", "quantity": "6"}

        text = page_text(client.post("/staff/items/i-1/update", data=form))

        assert "Widget XL" in text
        assert '<dd class="item-total">24.00</dd>' in text
        call = staff_items.calls_to("PUT", "/staff/item/update/i-1")[0]
        assert call.body["name"] == "Widget XL"

    def test_failed_update_restores_values(self, client, staff_items):
        staff_items.fail("PUT", "/staff/item/update/i-1", status=500, error="Write failed")
        form = {**VALID_ITEM, "name": "Widget XL"}

        text = page_text(client.post("/staff/items/i-1/update", data=form))

        assert "Write failed" in text
        assert "<h3>Widget</h3>" in text


class TestItemBoardCapabilities:
    @pytest.fixture
    def without_view_items(self, monkeypatch):
        monkeypatch.setattr(
            "safeware_web.services.session_service.resolve_capabilities",
            lambda role: CapabilitySet(role=role, codes=frozenset({"VIEW_DASHBOARD"})),
        )

    def test_staff_board_needs_view_items(self, client, staff_items, without_view_items):
        response = client.get("/staff/dashboard")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/")
        assert staff_items.calls_to("GET", "/staff/items") == []

    def test_supervisor_board_needs_view_items(self, client, backend, login_as, without_view_items):
        login_as("Supervisor")

        response = client.get("/supervisor/dashboard")

        assert response.status_code == 302
        assert backend.calls_to("GET", "/supervisor/items") == []


class TestSupervisorItems:
    def test_supervisor_uses_own_endpoints(self, client, backend, login_as):
        login_as("Supervisor")
        backend.on("GET", "/supervisor/items", [WIDGET])

        client.post("/supervisor/items/i-1/delete")

        assert len(backend.calls_to("DELETE", "/supervisor/item/remove/i-1")) == 1


class TestAuditorItems:
    """Auditor views are read-only projections."""

    def test_auditor_sees_items_without_controls(self, client, backend, login_as):
        login_as("Auditor")
        backend.on("GET", "/auditor/warehouses", [{"id": "wh-1", "name": "North", "location": "Oslo"}])
        backend.on("GET", "/auditor/items/warehouse/wh-1", [WIDGET])

        text = page_text(client.get("/auditor/warehouse/wh-1"))

        assert 'data-item-id="i-1"' in text
        assert "12.50" in text
        assert "<form" not in text.split("</header>")[1]

    def test_unknown_warehouse_redirects(self, client, backend, login_as):
        login_as("Auditor")

        response = client.get("/auditor/warehouse/wh-404")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/auditor/warehouses")


class TestSubmissionGateRoutes:
    def test_duplicate_submission_is_refused(self, client, staff_items):
        with submission_gate.hold(token_for("Staff"), "staff.create_item"):
            text = page_text(client.post("/staff/items/create", data=VALID_ITEM))

        assert "This action is already in progress" in text
        assert staff_items.mutating_calls() == []

    def test_gate_is_per_session(self, client, staff_items):
        with submission_gate.hold("someone-else", "staff.create_item"):
            client.post("/staff/items/create", data=VALID_ITEM)

        assert len(staff_items.calls_to("POST", "/staff/item/add")) == 1

    def test_gate_released_after_request(self, client, staff_items):
        client.post("/staff/items/create", data=VALID_ITEM)

        assert not submission_gate.is_active(token_for("Staff"), "staff.create_item")
        assert isinstance(submission_gate, SubmissionGate)
