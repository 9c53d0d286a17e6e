# Overview: Supervisor area; item CRUD for their warehouse and a read-only team list.

from flask import Blueprint, render_template, request

from ..decorators import require_capability, require_role
from ..models import ROLE_SUPERVISOR
from ..services.employee_service import EmployeeController
from ..services.item_service import ItemController
from ..validation import validate_item_form
from .common import mount, perform, render_item_board


supervisor_bp = Blueprint("supervisor", __name__, url_prefix="/supervisor")

TEMPLATE = "supervisor/dashboard.html"


@supervisor_bp.get("/dashboard")
@require_role(ROLE_SUPERVISOR)
@require_capability("VIEW_ITEMS")
def dashboard():
    return render_item_board(TEMPLATE, mount(ItemController))


@supervisor_bp.post("/items/create")
@require_role(ROLE_SUPERVISOR)
@require_capability("EDIT_ITEMS")
def create_item():
    items = mount(ItemController)
    form = request.form.to_dict()
    outcome = perform(
        "supervisor.create_item",
        lambda: items.create(validate_item_form(form)),
        success="Item created successfully",
    )
    if outcome.ok:
        return render_item_board(TEMPLATE, items)
    return render_item_board(TEMPLATE, items, errors=outcome.errors, form=form)


@supervisor_bp.post("/items/<item_id>/update")
@require_role(ROLE_SUPERVISOR)
@require_capability("EDIT_ITEMS")
def update_item(item_id):
    items = mount(ItemController)
    form = request.form.to_dict()
    outcome = perform(
        f"supervisor.update_item:{item_id}",
        lambda: items.update(item_id, validate_item_form(form)),
        success="Item updated successfully",
    )
    if outcome.ok:
        return render_item_board(TEMPLATE, items)
    return render_item_board(TEMPLATE, items, errors=outcome.errors, form=form, editing_id=item_id)


@supervisor_bp.post("/items/<item_id>/delete")
@require_role(ROLE_SUPERVISOR)
@require_capability("EDIT_ITEMS")
def delete_item(item_id):
    items = mount(ItemController)
    perform(
        f"supervisor.delete_item:{item_id}",
        lambda: items.delete(item_id),
        success="Item deleted successfully",
    )
    return render_item_board(TEMPLATE, items)


@supervisor_bp.get("/employees")
@require_role(ROLE_SUPERVISOR)
@require_capability("VIEW_TEAM")
def employees():
    """The team the backend scopes to this supervisor; nothing is editable here."""
    team = mount(EmployeeController)
    return render_template(
        "supervisor/employees.html",
        employees=team.records,
        load_error=team.state.error,
    )
