"""Presentation projections for the highlight cards and the vehicle table.

These are plain data with display formatting already applied; rendering is
left to whatever surface consumes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from registry_mcp.constants import (
    APPROVAL_STATUSES,
    QUICK_FILTER_DRAFT,
    QUICK_FILTER_PENDING,
    QUICK_FILTER_REJECTED,
    VEHICLE_STATUSES,
    VEHICLE_TYPES,
)
from registry_mcp.dashboard.records import HighlightCounts, VehicleRecord
from registry_mcp.normalization import format_trips

NO_DATA_MESSAGE = "No data available."


@dataclass(frozen=True)
class HighlightCard:
    title: str  # count, pre-formatted
    description: str
    selected: bool = False


@dataclass(frozen=True)
class TableColumn:
    title: str
    key: str
    sortable: bool = True


TABLE_COLUMNS: tuple[TableColumn, ...] = (
    TableColumn("License Plate", "license_plate"),
    TableColumn("Driver", "driver"),
    TableColumn("Vehicle Type", "vehicle_type"),
    TableColumn("Status", "vehicle_status"),
    TableColumn("Owner", "vehicle_owner"),
    TableColumn("Approval Status", "approval_status"),
    TableColumn("Trips", "trips", sortable=False),
)

SORTABLE_COLUMNS: frozenset[str] = frozenset(c.key for c in TABLE_COLUMNS if c.sortable)


def highlight_cards(
    counts: HighlightCounts | None, selected: str | None = None
) -> list[HighlightCard]:
    """Cards in fixed order; missing counts show as ``"0"``."""
    counts = counts or HighlightCounts()
    pairs = (
        (counts.draft, QUICK_FILTER_DRAFT),
        (counts.pending, QUICK_FILTER_PENDING),
        (counts.rejected, QUICK_FILTER_REJECTED),
    )
    return [
        HighlightCard(title=str(count), description=label, selected=label == selected)
        for count, label in pairs
    ]


def table_row(record: VehicleRecord) -> dict[str, Any]:
    return {
        "key": record.id,
        "license_plate": record.license_plate,
        "driver": record.driver,
        "vehicle_type": record.vehicle_type,
        "vehicle_status": record.vehicle_status,
        "vehicle_owner": record.vehicle_owner,
        "approval_status": record.approval_status,
        "trips": format_trips([(t.origin, t.destination) for t in record.trips]),
    }


def table_rows(records: tuple[VehicleRecord, ...] | list[VehicleRecord]) -> list[dict[str, Any]]:
    return [table_row(r) for r in records]


def filter_options() -> dict[str, Any]:
    """Choices offered by the type and status selectors."""
    return {
        "vehicle_types": list(VEHICLE_TYPES),
        "approval_statuses": [
            {"value": code, "label": label} for code, label in APPROVAL_STATUSES.items()
        ],
        "vehicle_statuses": [
            {"value": code, "label": label} for code, label in VEHICLE_STATUSES.items()
        ],
    }
