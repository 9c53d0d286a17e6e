from __future__ import annotations

import logging
from dataclasses import dataclass

from .api_client import ApiError, AuthenticationError, ENVELOPE_WAREHOUSES
from .endpoints import WAREHOUSE_LIST
from .item_service import fetch_all_manager_items, total_value
from ..models import ROLE_MANAGER


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagerSummary:
    total_warehouses: int = 0
    total_items: int = 0
    total_value: float = 0.0


def manager_summary(store) -> ManagerSummary:
    """
    Company-wide counts for the manager dashboard.

    The value is recomputed from quantity * price of every item; a failed
    fetch shows zeros instead of an error page.
    """
    try:
        warehouses = store.api.fetch_list(WAREHOUSE_LIST[ROLE_MANAGER], envelope=ENVELOPE_WAREHOUSES)
        items = fetch_all_manager_items(store.api)
    except AuthenticationError:
        raise
    except ApiError as exc:
        logger.warning("Failed to fetch dashboard data: %s", exc)
        return ManagerSummary()

    return ManagerSummary(
        total_warehouses=len(warehouses),
        total_items=len(items),
        total_value=total_value(items),
    )
