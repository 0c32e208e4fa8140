"""Translate dashboard state into the flat list-endpoint payload.

Merge order matters: the quick-filter card supplies default status values,
then the explicit status selectors overwrite them.  Unset dimensions are
omitted from the payload, never sent as null.
"""

from __future__ import annotations

from typing import Any

from registry_mcp.constants import QUICK_FILTER_PRESETS
from registry_mcp.dashboard.state import DashboardState, FilterCriteria, Pagination
from registry_mcp.normalization import to_epoch_ms


def _quick_filter_defaults(quick_filter: str | None) -> dict[str, int]:
    preset = QUICK_FILTER_PRESETS.get(quick_filter) if quick_filter else None
    if preset is None:
        return {}
    approval_status, vehicle_status = preset
    defaults = {"approval_status": approval_status}
    if vehicle_status is not None:
        defaults["vehicle_status"] = vehicle_status
    return defaults


def build_filters(criteria: FilterCriteria) -> dict[str, Any]:
    """Return only the filter keys of the payload."""
    filters: dict[str, Any] = _quick_filter_defaults(criteria.quick_filter)

    if criteria.committed_search_term:
        filters["license_plate"] = criteria.committed_search_term

    if criteria.date_range is not None:
        start, end = criteria.date_range
        if start is not None:
            filters["mtime_from"] = to_epoch_ms(start)
        if end is not None:
            filters["mtime_to"] = to_epoch_ms(end)

    if criteria.vehicle_type:
        filters["vehicle_type"] = criteria.vehicle_type

    if criteria.passenger_capacity_min is not None:
        filters["passenger_capacity_min"] = criteria.passenger_capacity_min
    if criteria.passenger_capacity_max is not None:
        filters["passenger_capacity_max"] = criteria.passenger_capacity_max

    # Explicit selectors win over the card defaults.
    if criteria.approval_status is not None:
        filters["approval_status"] = criteria.approval_status
    if criteria.vehicle_status is not None:
        filters["vehicle_status"] = criteria.vehicle_status

    return filters


def build_query(criteria: FilterCriteria, pagination: Pagination) -> dict[str, Any]:
    """Build the list-endpoint request body for one criteria snapshot."""
    payload: dict[str, Any] = {
        "page": pagination.current_page,
        "size": pagination.page_size,
    }
    if pagination.sort.active:
        payload["sortBy"] = pagination.sort.column
        payload["sortOrder"] = pagination.sort.order
    payload.update(build_filters(criteria))
    return payload


def build_state_query(state: DashboardState) -> dict[str, Any]:
    return build_query(state.criteria, state.pagination)
