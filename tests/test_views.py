"""Presentation projection tests — highlight cards and table rows."""

from __future__ import annotations

from registry_mcp.dashboard.records import HighlightCounts, Trip, VehicleRecord
from registry_mcp.dashboard.views import (
    SORTABLE_COLUMNS,
    TABLE_COLUMNS,
    filter_options,
    highlight_cards,
    table_row,
)


class TestHighlightCards:
    def test_fixed_order_and_string_titles(self):
        cards = highlight_cards(HighlightCounts(draft=12, pending=3, rejected=0))
        assert [(c.title, c.description) for c in cards] == [
            ("12", "Draft"),
            ("3", "Pending Information"),
            ("0", "Rejected"),
        ]
        assert not any(c.selected for c in cards)

    def test_missing_counts_show_zero(self):
        assert [c.title for c in highlight_cards(None)] == ["0", "0", "0"]

    def test_selected_card_flagged(self):
        cards = highlight_cards(HighlightCounts(), selected="Rejected")
        assert [c.selected for c in cards] == [False, False, True]


class TestTable:
    def test_trips_render_as_text(self):
        record = VehicleRecord(
            id="VH-9",
            license_plate="XYZ9",
            trips=(Trip("Depot", "Airport"), Trip("Airport", "Harbor")),
        )
        row = table_row(record)
        assert row["key"] == "VH-9"
        assert row["trips"] == "Depot to Airport, Airport to Harbor"

    def test_no_trips(self):
        assert table_row(VehicleRecord(id="VH-1"))["trips"] == ""

    def test_trips_column_not_sortable(self):
        assert "trips" not in SORTABLE_COLUMNS
        assert len(SORTABLE_COLUMNS) == len(TABLE_COLUMNS) - 1


def test_filter_options():
    options = filter_options()
    assert options["vehicle_types"] == ["Truck", "Bus", "Van", "Taxi"]
    assert {"value": 2, "label": "Pending"} in options["approval_statuses"]
    assert options["vehicle_statuses"][-1] == {"value": 2, "label": "Decommissioned"}
