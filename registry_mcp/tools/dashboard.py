"""Dashboard tool implementations — one event per tool, JSON snapshot out."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from registry_mcp.dashboard.controller import FetchController
from registry_mcp.dashboard.state import (
    ApprovalStatusChanged,
    DashboardEvent,
    DateRangeChanged,
    PageChanged,
    PassengerCapacityMaxChanged,
    PassengerCapacityMinChanged,
    QuickFilterToggled,
    SearchInputChanged,
    VehicleStatusChanged,
    VehicleTypeChanged,
)
from registry_mcp.dashboard.views import (
    NO_DATA_MESSAGE,
    SORTABLE_COLUMNS,
    TABLE_COLUMNS,
    filter_options,
    highlight_cards,
    table_rows,
)
from registry_mcp.normalization import parse_datetime, parse_int


def _build_response(tool_name: str, data: dict[str, Any]) -> str:
    payload = {
        "_tool": tool_name,
        "_meta": {"schema_version": 1},
        "data": data,
    }
    return json.dumps(payload, indent=2, default=str)


def _optional_int(value: int | str | None, label: str) -> int | None:
    """Empty input clears the selector; anything else must be an integer."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    parsed = parse_int(value)
    if parsed is None:
        raise ValueError(f"{label} must be an integer, got {value!r}")
    return parsed


def dashboard_snapshot(controller: FetchController) -> dict[str, Any]:
    """Everything a surface needs to render the dashboard."""
    state = controller.state
    criteria = state.criteria
    pagination = state.pagination

    date_range = None
    if criteria.date_range is not None:
        start, end = criteria.date_range
        date_range = {
            "from": start.isoformat() if start else None,
            "to": end.isoformat() if end else None,
        }

    snapshot: dict[str, Any] = {
        "loading": controller.loading,
        "highlights": [
            asdict(card) for card in highlight_cards(controller.highlights, state.selected_card)
        ],
        "filters": {
            "quick_filter": criteria.quick_filter,
            "search_input": state.search_input,
            "committed_search_term": criteria.committed_search_term,
            "date_range": date_range,
            "vehicle_type": criteria.vehicle_type,
            "passenger_capacity_min": criteria.passenger_capacity_min,
            "passenger_capacity_max": criteria.passenger_capacity_max,
            "approval_status": criteria.approval_status,
            "vehicle_status": criteria.vehicle_status,
        },
        "pagination": {
            "current_page": pagination.current_page,
            "page_size": pagination.page_size,
            "total": pagination.total,
            "sort_by": pagination.sort.column,
            "sort_order": pagination.sort.order,
        },
        "columns": [asdict(c) for c in TABLE_COLUMNS],
        "rows": table_rows(controller.records),
    }
    if controller.highlights is None:
        snapshot["message"] = NO_DATA_MESSAGE
    return snapshot


async def _dispatch(controller: FetchController, tool_name: str, event: DashboardEvent) -> str:
    refetched = await controller.dispatch(event)
    data = dashboard_snapshot(controller)
    data["refetched"] = refetched
    return _build_response(tool_name, data)


async def get_dashboard_impl(controller: FetchController) -> str:
    data = dashboard_snapshot(controller)
    data["options"] = filter_options()
    return _build_response("get_dashboard", data)


async def refresh_highlights_impl(controller: FetchController) -> str:
    await controller.refresh_highlights()
    return _build_response("refresh_highlights", dashboard_snapshot(controller))


async def toggle_quick_filter_impl(controller: FetchController, *, card: str) -> str:
    return await _dispatch(controller, "toggle_quick_filter", QuickFilterToggled(card.strip()))


async def set_search_text_impl(controller: FetchController, *, text: str) -> str:
    return await _dispatch(controller, "set_search_text", SearchInputChanged(text))


async def commit_search_impl(controller: FetchController, *, text: str | None = None) -> str:
    refetched = await controller.commit_search(text)
    data = dashboard_snapshot(controller)
    data["refetched"] = refetched
    return _build_response("commit_search", data)


async def set_date_range_impl(
    controller: FetchController, *, start: str = "", end: str = ""
) -> str:
    event = DateRangeChanged(parse_datetime(start), parse_datetime(end))
    return await _dispatch(controller, "set_date_range", event)


async def set_vehicle_type_impl(controller: FetchController, *, vehicle_type: str = "") -> str:
    event = VehicleTypeChanged(vehicle_type.strip() or None)
    return await _dispatch(controller, "set_vehicle_type", event)


async def set_passenger_capacity_min_impl(
    controller: FetchController, *, value: int | str | None = None
) -> str:
    event = PassengerCapacityMinChanged(_optional_int(value, "passenger_capacity_min"))
    return await _dispatch(controller, "set_passenger_capacity_min", event)


async def set_passenger_capacity_max_impl(
    controller: FetchController, *, value: int | str | None = None
) -> str:
    event = PassengerCapacityMaxChanged(_optional_int(value, "passenger_capacity_max"))
    return await _dispatch(controller, "set_passenger_capacity_max", event)


async def set_approval_status_impl(
    controller: FetchController, *, status: int | str | None = None
) -> str:
    event = ApprovalStatusChanged(_optional_int(status, "approval_status"))
    return await _dispatch(controller, "set_approval_status", event)


async def set_vehicle_status_impl(
    controller: FetchController, *, status: int | str | None = None
) -> str:
    event = VehicleStatusChanged(_optional_int(status, "vehicle_status"))
    return await _dispatch(controller, "set_vehicle_status", event)


async def change_table_impl(
    controller: FetchController,
    *,
    page: int,
    page_size: int | None = None,
    sort_by: str = "",
    sort_order: str = "",
) -> str:
    sort_by = sort_by.strip()
    if sort_by and sort_by not in SORTABLE_COLUMNS:
        raise ValueError(
            f"Cannot sort by '{sort_by}'. Sortable columns: {', '.join(sorted(SORTABLE_COLUMNS))}"
        )
    event = PageChanged(
        page=page,
        page_size=page_size,
        sort_column=sort_by or None,
        sort_order=sort_order.strip() or None,
    )
    return await _dispatch(controller, "change_table", event)


async def clear_filters_impl(controller: FetchController) -> str:
    refetched = await controller.clear_filters()
    data = dashboard_snapshot(controller)
    data["refetched"] = refetched
    return _build_response("clear_filters", data)
