"""Vehicle registry MCP server — FastMCP entry point for the filtered dashboard."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Awaitable, Callable

from mcp.server.fastmcp import FastMCP

from registry_mcp.dashboard.controller import FetchController
from registry_mcp.data.session import get_started_controller
from registry_mcp.tools.dashboard import (
    change_table_impl,
    clear_filters_impl,
    commit_search_impl,
    get_dashboard_impl,
    refresh_highlights_impl,
    set_approval_status_impl,
    set_date_range_impl,
    set_passenger_capacity_max_impl,
    set_passenger_capacity_min_impl,
    set_search_text_impl,
    set_vehicle_status_impl,
    set_vehicle_type_impl,
    toggle_quick_filter_impl,
)
from registry_mcp.tools.errors import log_and_return_tool_error

# Load .env from project root (no extra dependency)
_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
if _ENV_FILE.is_file():
    for line in _ENV_FILE.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            k, _, v = line.partition("=")
            os.environ.setdefault(k.strip(), v.strip())

mcp = FastMCP("VehicleRegistry")
logger = logging.getLogger(__name__)

_RETRY_MESSAGE = (
    "I am having trouble updating the vehicle dashboard right now. "
    "Please try again in a moment."
)


async def _run_tool(
    tool_name: str,
    impl: Callable[..., Awaitable[str]],
    **kwargs: Any,
) -> str:
    try:
        controller: FetchController = await get_started_controller()
        return await impl(controller, **kwargs)
    except ValueError as exc:
        return str(exc)
    except Exception as exc:
        return log_and_return_tool_error(
            tool_name=tool_name,
            exc=exc,
            user_message=_RETRY_MESSAGE,
        )


# ── Tool registrations ──────────────────────────────────────────────


@mcp.tool()
async def get_dashboard() -> str:
    """Return highlight cards, active filters, pagination and the visible rows."""
    return await _run_tool("get_dashboard", get_dashboard_impl)


@mcp.tool()
async def refresh_highlights() -> str:
    """Reload the global draft / pending / rejected counts."""
    return await _run_tool("refresh_highlights", refresh_highlights_impl)


@mcp.tool()
async def toggle_quick_filter(card: str) -> str:
    """Select a highlight card, or deselect it if it is already selected.

    card: 'Draft', 'Pending Information' or 'Rejected'.
    Also clears the date range, the search box and any committed plate search.
    """
    return await _run_tool("toggle_quick_filter", toggle_quick_filter_impl, card=card)


@mcp.tool()
async def set_search_text(text: str) -> str:
    """Type into the license-plate search box without searching."""
    return await _run_tool("set_search_text", set_search_text_impl, text=text)


@mcp.tool()
async def commit_search(text: str | None = None) -> str:
    """Press Enter in the search box, optionally replacing its text first."""
    return await _run_tool("commit_search", commit_search_impl, text=text)


@mcp.tool()
async def set_date_range(start: str = "", end: str = "") -> str:
    """Filter by last-modified time (ISO-8601 or epoch ms). Empty bounds clear the range."""
    return await _run_tool("set_date_range", set_date_range_impl, start=start, end=end)


@mcp.tool()
async def set_vehicle_type(vehicle_type: str = "") -> str:
    """Filter by vehicle type: Truck, Bus, Van or Taxi. Empty clears."""
    return await _run_tool(
        "set_vehicle_type", set_vehicle_type_impl, vehicle_type=vehicle_type
    )


@mcp.tool()
async def set_passenger_capacity_min(value: int | None = None) -> str:
    """Set the minimum passenger capacity. Omit to clear."""
    return await _run_tool(
        "set_passenger_capacity_min", set_passenger_capacity_min_impl, value=value
    )


@mcp.tool()
async def set_passenger_capacity_max(value: int | None = None) -> str:
    """Set the maximum passenger capacity. Omit to clear."""
    return await _run_tool(
        "set_passenger_capacity_max", set_passenger_capacity_max_impl, value=value
    )


@mcp.tool()
async def set_approval_status(status: int | None = None) -> str:
    """Filter by approval status: 0 Draft, 1 Approved, 2 Pending, 3 Rejected.

    Overrides the status implied by a selected highlight card.
    """
    return await _run_tool("set_approval_status", set_approval_status_impl, status=status)


@mcp.tool()
async def set_vehicle_status(status: int | None = None) -> str:
    """Filter by vehicle status: 0 Active, 1 Inactive, 2 Decommissioned.

    Overrides the status implied by a selected highlight card.
    """
    return await _run_tool("set_vehicle_status", set_vehicle_status_impl, status=status)


@mcp.tool()
async def change_table(
    page: int = 1,
    page_size: int | None = None,
    sort_by: str = "",
    sort_order: str = "",
) -> str:
    """Change page, page size or sort.

    sort_order: 'ascend' or 'descend'; empty sort_by clears sorting.
    """
    return await _run_tool(
        "change_table",
        change_table_impl,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@mcp.tool()
async def clear_filters() -> str:
    """Reset every filter, the search box and the sort, then reload the first page once."""
    return await _run_tool("clear_filters", clear_filters_impl)


if __name__ == "__main__":
    mcp.run()
