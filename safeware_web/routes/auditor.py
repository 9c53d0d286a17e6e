# Overview: Auditor area; read-only warehouses, per-warehouse items and the audit trail.

from flask import Blueprint, flash, redirect, render_template, url_for

from ..decorators import require_capability, require_role
from ..models import ROLE_AUDITOR
from ..services.item_service import ItemController
from ..services.warehouse_service import WarehouseController
from .common import mount, render_audit_logs


auditor_bp = Blueprint("auditor", __name__, url_prefix="/auditor")


@auditor_bp.get("/dashboard")
@require_role(ROLE_AUDITOR)
def dashboard():
    return render_template("auditor/dashboard.html")


@auditor_bp.get("/warehouses")
@require_role(ROLE_AUDITOR)
@require_capability("VIEW_WAREHOUSES")
def warehouses():
    controller = mount(WarehouseController)
    return render_template(
        "auditor/warehouses.html",
        warehouses=controller.records,
        load_error=controller.state.error,
    )


@auditor_bp.get("/warehouse/<warehouse_id>")
@require_role(ROLE_AUDITOR)
@require_capability("VIEW_ITEMS")
def warehouse_details(warehouse_id):
    warehouse = mount(WarehouseController).find(warehouse_id)
    if warehouse is None:
        flash("Warehouse not found", "error")
        return redirect(url_for("auditor.warehouses"))

    items = mount(ItemController, warehouse_id=warehouse_id)
    return render_template(
        "auditor/warehouse_details.html",
        warehouse=warehouse,
        items=items.records,
        items_error=items.state.error,
        total_value=items.total_value,
    )


@auditor_bp.get("/logs")
@require_role(ROLE_AUDITOR)
@require_capability("VIEW_AUDIT_LOGS")
def logs():
    return render_audit_logs("auditor/logs.html", "auditor.logs")
