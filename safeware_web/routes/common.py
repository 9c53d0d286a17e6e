# Overview: Shared route plumbing; controller mounting and the mutating-action wrapper.

from dataclasses import dataclass, field

from flask import current_app, flash, g, render_template, request

from ..decorators import flash_field_errors
from ..models import ITEM_QUALITIES
from ..services.api_client import ApiError, AuthenticationError
from ..services.audit_service import AuditLogController, AuditLogFilters
from ..services.permission_service import CapabilityDeniedError
from ..services.session_service import get_session_store
from ..services.view_state import (
    PlaceholderIdError,
    StaleRecordError,
    SubmissionInProgressError,
    submission_gate,
)
from ..validation import ValidationError


@dataclass
class ActionOutcome:
    ok: bool
    errors: dict = field(default_factory=dict)


def mount(controller_cls, *args, **kwargs):
    """
    Build a controller for the current session and load its list.

    Controllers mounted here are unmounted at teardown, so a late write
    after the response has been produced is ignored.
    """
    store = get_session_store()
    kwargs.setdefault("refresh_after_mutation", current_app.config.get("REFRESH_AFTER_MUTATION", False))
    controller = controller_cls(store, *args, **kwargs)
    controller.mount()
    g.setdefault("mounted_controllers", []).append(controller)
    return controller


def unmount_all(exc=None) -> None:
    for controller in g.pop("mounted_controllers", []):
        controller.unmount()


def perform(control: str, action, *, success: str | None = None) -> ActionOutcome:
    """
    Run one mutating action behind the per-control submission gate.

    Validation problems come back as field errors; API failures become an
    error notification with the server's message. List state has already
    been rolled back by the controller when this returns a failure.
    AuthenticationError is left to the app-wide handler.
    """
    store = get_session_store()
    try:
        with submission_gate.hold(store.get_access_token(), control):
            action()
    except ValidationError as exc:
        flash_field_errors(exc.errors)
        return ActionOutcome(False, exc.errors)
    except SubmissionInProgressError as exc:
        flash(str(exc), "info")
        return ActionOutcome(False)
    except (PlaceholderIdError, StaleRecordError) as exc:
        flash(str(exc), "error")
        return ActionOutcome(False)
    except CapabilityDeniedError as exc:
        current_app.logger.info("Denied %s for role %s: %s", control, store.role, exc)
        flash("You do not have permission to do that", "error")
        return ActionOutcome(False)
    except AuthenticationError:
        raise
    except ApiError as exc:
        flash(exc.message, "error")
        return ActionOutcome(False)
    except Exception:
        current_app.logger.exception("Unexpected failure in %s", control)
        flash("Something went wrong", "error")
        return ActionOutcome(False)

    if success:
        flash(success, "success")
    return ActionOutcome(True)


def render_audit_logs(template: str, endpoint: str):
    """Shared by the Manager and Auditor log pages; ?reset=1 clears every filter."""
    controller = AuditLogController(get_session_store())
    if request.args.get("reset"):
        state = controller.reset()
    else:
        state = controller.fetch(AuditLogFilters.from_mapping(request.args))
    return render_template(
        template,
        logs=state.records,
        load_error=state.error,
        filters=controller.filters,
        endpoint=endpoint,
    )


def render_item_board(template: str, items, *, errors=None, form=None, editing_id=None, **context):
    """Item grid for the roles that see a single warehouse (Supervisor, Staff)."""
    return render_template(
        template,
        items=items.records,
        items_error=items.state.error,
        total_value=items.total_value,
        read_only=items.read_only,
        qualities=ITEM_QUALITIES,
        errors=errors or {},
        form=form or {},
        editing_id=editing_id,
        **context,
    )
