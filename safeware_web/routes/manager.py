# Overview: Manager area; dashboard, employee board, warehouse CRUD, warehouse details, audit logs.

# safeware_web/routes/manager.py
"""
Manager pages

Every page mounts its controllers for the request, applies at most one
mutation optimistically and renders straight from the controllers' local
state. A POST never redirects to a refetching GET, so the result of the
action is what the user sees next.
"""

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..decorators import require_capability, require_role
from ..models import EMPLOYEE_ROLES, ITEM_QUALITIES, ROLE_MANAGER, WAREHOUSE_BOUND_ROLES
from ..services.dashboard_service import manager_summary
from ..services.employee_service import EmployeeController
from ..services.item_service import ItemController
from ..services.session_service import get_session_store
from ..services.warehouse_service import WarehouseController
from ..validation import (
    validate_employee_form,
    validate_item_form,
    validate_warehouse_form,
)
from .common import mount, perform, render_audit_logs


manager_bp = Blueprint("manager", __name__, url_prefix="/manager")


@manager_bp.get("/dashboard")
@require_role(ROLE_MANAGER)
def dashboard():
    summary = manager_summary(get_session_store())
    return render_template("manager/dashboard.html", summary=summary)


# =============================================================================
# EMPLOYEES
# =============================================================================


def _mount_employee_board():
    warehouses = mount(WarehouseController)
    employees = mount(EmployeeController, warehouse_names=warehouses.names_by_id())
    return warehouses, employees


def _employees_page(warehouses, employees, *, errors=None, form=None, editing_id=None):
    return render_template(
        "manager/employees.html",
        warehouses=warehouses.records,
        groups=employees.grouped_by_role(),
        load_error=employees.state.error,
        roles=EMPLOYEE_ROLES,
        errors=errors or {},
        form=form or {},
        editing_id=editing_id,
    )


@manager_bp.get("/employees")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_EMPLOYEES")
def employees():
    warehouses, employees = _mount_employee_board()
    return _employees_page(warehouses, employees)


@manager_bp.post("/employees/create")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_EMPLOYEES")
def create_employee():
    warehouses, employees = _mount_employee_board()
    form = request.form.to_dict()
    outcome = perform(
        "manager.create_employee",
        lambda: employees.create(validate_employee_form(form)),
        success="Employee created successfully",
    )
    if outcome.ok:
        return _employees_page(warehouses, employees)
    form.pop("password", None)
    return _employees_page(warehouses, employees, errors=outcome.errors, form=form)


@manager_bp.post("/employees/<employee_id>/update")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_EMPLOYEES")
def update_employee(employee_id):
    warehouses, employees = _mount_employee_board()
    form = request.form.to_dict()

    def action():
        # The role of an existing employee decides which rules apply
        existing = employees.get(employee_id)
        cleaned = validate_employee_form(form, editing=True, role=existing.role)
        employees.update(employee_id, cleaned, role=existing.role)

    outcome = perform(
        f"manager.update_employee:{employee_id}", action, success="Employee updated successfully"
    )
    if outcome.ok:
        return _employees_page(warehouses, employees)
    form.pop("password", None)
    return _employees_page(
        warehouses, employees, errors=outcome.errors, form=form, editing_id=employee_id
    )


@manager_bp.post("/employees/<employee_id>/delete")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_EMPLOYEES")
def delete_employee(employee_id):
    warehouses, employees = _mount_employee_board()
    perform(
        f"manager.delete_employee:{employee_id}",
        lambda: employees.delete(employee_id),
        success="Employee deleted successfully",
    )
    return _employees_page(warehouses, employees)


# =============================================================================
# WAREHOUSES
# =============================================================================


def _warehouses_page(warehouses, *, errors=None, form=None, editing_id=None):
    return render_template(
        "manager/warehouses.html",
        warehouses=warehouses.records,
        load_error=warehouses.state.error,
        errors=errors or {},
        form=form or {},
        editing_id=editing_id,
    )


@manager_bp.get("/warehouses")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_WAREHOUSES")
def warehouses():
    return _warehouses_page(mount(WarehouseController))


@manager_bp.post("/warehouses/create")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_WAREHOUSES")
def create_warehouse():
    warehouses = mount(WarehouseController)
    form = request.form.to_dict()
    outcome = perform(
        "manager.create_warehouse",
        lambda: warehouses.create(validate_warehouse_form(form)),
        success="Warehouse created successfully",
    )
    if outcome.ok:
        return _warehouses_page(warehouses)
    return _warehouses_page(warehouses, errors=outcome.errors, form=form)


@manager_bp.post("/warehouses/<warehouse_id>/update")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_WAREHOUSES")
def update_warehouse(warehouse_id):
    warehouses = mount(WarehouseController)
    form = request.form.to_dict()
    outcome = perform(
        f"manager.update_warehouse:{warehouse_id}",
        lambda: warehouses.update(warehouse_id, validate_warehouse_form(form)),
        success="Warehouse updated successfully",
    )
    if outcome.ok:
        return _warehouses_page(warehouses)
    return _warehouses_page(warehouses, errors=outcome.errors, form=form, editing_id=warehouse_id)


@manager_bp.post("/warehouses/<warehouse_id>/delete")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_WAREHOUSES")
def delete_warehouse(warehouse_id):
    warehouses = mount(WarehouseController)
    perform(
        f"manager.delete_warehouse:{warehouse_id}",
        lambda: warehouses.delete(warehouse_id),
        success="Warehouse deleted successfully",
    )
    return _warehouses_page(warehouses)


# =============================================================================
# WAREHOUSE DETAILS
# =============================================================================


def _mount_warehouse_details(warehouse_id):
    """Returns None when the warehouse is not in the session's list."""
    warehouses = mount(WarehouseController)
    warehouse = warehouses.find(warehouse_id)
    if warehouse is None:
        return None
    items = mount(ItemController, warehouse_id=warehouse_id)
    employees = mount(EmployeeController, warehouse_names=warehouses.names_by_id())
    return warehouse, items, employees


def _missing_warehouse():
    flash("Warehouse not found", "error")
    return redirect(url_for("manager.warehouses"))


def _details_page(details, *, errors=None, form=None, editing_id=None, form_name=None):
    warehouse, items, employees = details
    assigned = employees.assigned_to(warehouse.id)
    return render_template(
        "manager/warehouse_details.html",
        warehouse=warehouse,
        items=items.records,
        items_error=items.state.error,
        total_value=items.total_value,
        supervisors=[e for e in assigned if e.role == "Supervisor"],
        staff=[e for e in assigned if e.role == "Staff"],
        qualities=ITEM_QUALITIES,
        bound_roles=WAREHOUSE_BOUND_ROLES,
        errors=errors or {},
        form=form or {},
        editing_id=editing_id,
        form_name=form_name,
    )


@manager_bp.get("/warehouse/<warehouse_id>")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_WAREHOUSES")
def warehouse_details(warehouse_id):
    details = _mount_warehouse_details(warehouse_id)
    if details is None:
        return _missing_warehouse()
    return _details_page(details)


@manager_bp.post("/warehouse/<warehouse_id>/items/create")
@require_role(ROLE_MANAGER)
@require_capability("EDIT_ITEMS")
def create_item(warehouse_id):
    details = _mount_warehouse_details(warehouse_id)
    if details is None:
        return _missing_warehouse()
    items = details[1]
    form = request.form.to_dict()
    outcome = perform(
        f"manager.create_item:{warehouse_id}",
        lambda: items.create(validate_item_form(form)),
        success="Item created successfully",
    )
    if outcome.ok:
        return _details_page(details)
    return _details_page(details, errors=outcome.errors, form=form, form_name="item")


@manager_bp.post("/warehouse/<warehouse_id>/items/<item_id>/update")
@require_role(ROLE_MANAGER)
@require_capability("EDIT_ITEMS")
def update_item(warehouse_id, item_id):
    details = _mount_warehouse_details(warehouse_id)
    if details is None:
        return _missing_warehouse()
    items = details[1]
    form = request.form.to_dict()
    outcome = perform(
        f"manager.update_item:{item_id}",
        lambda: items.update(item_id, validate_item_form(form)),
        success="Item updated successfully",
    )
    if outcome.ok:
        return _details_page(details)
    return _details_page(details, errors=outcome.errors, form=form, editing_id=item_id, form_name="item")


@manager_bp.post("/warehouse/<warehouse_id>/items/<item_id>/delete")
@require_role(ROLE_MANAGER)
@require_capability("EDIT_ITEMS")
def delete_item(warehouse_id, item_id):
    details = _mount_warehouse_details(warehouse_id)
    if details is None:
        return _missing_warehouse()
    perform(
        f"manager.delete_item:{item_id}",
        lambda: details[1].delete(item_id),
        success="Item deleted successfully",
    )
    return _details_page(details)


@manager_bp.post("/warehouse/<warehouse_id>/employees/create")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_EMPLOYEES")
def add_warehouse_employee(warehouse_id):
    details = _mount_warehouse_details(warehouse_id)
    if details is None:
        return _missing_warehouse()
    employees = details[2]
    form = request.form.to_dict()
    # Employees added from this page always belong to this warehouse
    form["warehouse_id"] = warehouse_id
    outcome = perform(
        f"manager.add_warehouse_employee:{warehouse_id}",
        lambda: employees.create(validate_employee_form(form, allowed_roles=WAREHOUSE_BOUND_ROLES)),
        success="Employee added successfully",
    )
    if outcome.ok:
        return _details_page(details)
    form.pop("password", None)
    return _details_page(details, errors=outcome.errors, form=form, form_name="employee")


@manager_bp.post("/warehouse/<warehouse_id>/employees/<employee_id>/delete")
@require_role(ROLE_MANAGER)
@require_capability("MANAGE_EMPLOYEES")
def remove_warehouse_employee(warehouse_id, employee_id):
    details = _mount_warehouse_details(warehouse_id)
    if details is None:
        return _missing_warehouse()
    perform(
        f"manager.delete_employee:{employee_id}",
        lambda: details[2].delete(employee_id),
        success="Employee removed successfully",
    )
    return _details_page(details)


# =============================================================================
# AUDIT LOGS
# =============================================================================


@manager_bp.get("/logs")
@require_role(ROLE_MANAGER)
@require_capability("VIEW_AUDIT_LOGS")
def logs():
    return render_audit_logs("manager/logs.html", "manager.logs")

