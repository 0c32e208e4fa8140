"""Shared constants for the vehicle registry dashboard.

Single source of truth for status codes, quick-filter presets and endpoints.
"""

from __future__ import annotations

# Quick-filter card labels, in display order.
QUICK_FILTER_DRAFT = "Draft"
QUICK_FILTER_PENDING = "Pending Information"
QUICK_FILTER_REJECTED = "Rejected"

QUICK_FILTERS: tuple[str, ...] = (
    QUICK_FILTER_DRAFT,
    QUICK_FILTER_PENDING,
    QUICK_FILTER_REJECTED,
)

APPROVAL_STATUSES: dict[int, str] = {
    0: "Draft",
    1: "Approved",
    2: "Pending",
    3: "Rejected",
}

VEHICLE_STATUSES: dict[int, str] = {
    0: "Active",
    1: "Inactive",
    2: "Decommissioned",
}

# (approval_status, vehicle_status) implied by each card; None = not implied.
QUICK_FILTER_PRESETS: dict[str, tuple[int, int | None]] = {
    QUICK_FILTER_DRAFT: (0, None),
    QUICK_FILTER_PENDING: (2, 0),
    QUICK_FILTER_REJECTED: (3, 0),
}

VEHICLE_TYPES: tuple[str, ...] = ("Truck", "Bus", "Van", "Taxi")

SORT_ORDERS: frozenset[str] = frozenset({"ascend", "descend"})

DEFAULT_PAGE_SIZE = 10

LIST_VEHICLES_PATH = "/vehicle/get_all_vehicles"
HIGHLIGHTS_PATH = "/vehicle/get_highlights"
