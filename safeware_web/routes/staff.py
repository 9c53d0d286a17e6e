# Overview: Staff area; item CRUD for the warehouse the backend assigns to the session.

from flask import Blueprint, request

from ..decorators import require_capability, require_role
from ..models import ROLE_STAFF
from ..services.item_service import ItemController
from ..validation import validate_item_form
from .common import mount, perform, render_item_board


staff_bp = Blueprint("staff", __name__, url_prefix="/staff")

TEMPLATE = "staff/dashboard.html"


@staff_bp.get("/dashboard")
@require_role(ROLE_STAFF)
@require_capability("VIEW_ITEMS")
def dashboard():
    return render_item_board(TEMPLATE, mount(ItemController))


@staff_bp.post("/items/create")
@require_role(ROLE_STAFF)
@require_capability("EDIT_ITEMS")
def create_item():
    items = mount(ItemController)
    form = request.form.to_dict()
    outcome = perform(
        "staff.create_item",
        lambda: items.create(validate_item_form(form)),
        success="Item created successfully",
    )
    if outcome.ok:
        return render_item_board(TEMPLATE, items)
    return render_item_board(TEMPLATE, items, errors=outcome.errors, form=form)


@staff_bp.post("/items/<item_id>/update")
@require_role(ROLE_STAFF)
@require_capability("EDIT_ITEMS")
def update_item(item_id):
    items = mount(ItemController)
    form = request.form.to_dict()
    outcome = perform(
        f"staff.update_item:{item_id}",
        lambda: items.update(item_id, validate_item_form(form)),
        success="Item updated successfully",
    )
    if outcome.ok:
        return render_item_board(TEMPLATE, items)
    return render_item_board(TEMPLATE, items, errors=outcome.errors, form=form, editing_id=item_id)


@staff_bp.post("/items/<item_id>/delete")
@require_role(ROLE_STAFF)
@require_capability("EDIT_ITEMS")
def delete_item(item_id):
    items = mount(ItemController)
    perform(
        f"staff.delete_item:{item_id}",
        lambda: items.delete(item_id),
        success="Item deleted successfully",
    )
    return render_item_board(TEMPLATE, items)
