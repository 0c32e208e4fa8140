"""Query builder tests — merge precedence, omission and payload shape."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from registry_mcp.constants import (
    QUICK_FILTER_DRAFT,
    QUICK_FILTER_PENDING,
    QUICK_FILTER_REJECTED,
    QUICK_FILTERS,
)
from registry_mcp.dashboard.query import build_filters, build_query, build_state_query
from registry_mcp.dashboard.state import (
    FilterCriteria,
    Pagination,
    SortSpec,
    initial_state,
)

_OPTIONAL_KEYS = {
    "approval_status",
    "vehicle_status",
    "license_plate",
    "mtime_from",
    "mtime_to",
    "vehicle_type",
    "passenger_capacity_min",
    "passenger_capacity_max",
}


class TestQuickFilterPresets:
    def test_draft_sets_only_approval_status(self):
        filters = build_filters(FilterCriteria(quick_filter=QUICK_FILTER_DRAFT))
        assert filters == {"approval_status": 0}

    def test_rejected_preset(self):
        filters = build_filters(FilterCriteria(quick_filter=QUICK_FILTER_REJECTED))
        assert filters == {"approval_status": 3, "vehicle_status": 0}

    def test_pending_information_preset(self):
        filters = build_filters(FilterCriteria(quick_filter=QUICK_FILTER_PENDING))
        assert filters == {"approval_status": 2, "vehicle_status": 0}


class TestPrecedence:
    @pytest.mark.parametrize("quick_filter", [None, *QUICK_FILTERS])
    @pytest.mark.parametrize("approval, vehicle", [(1, 2), (0, 1), (3, 0)])
    def test_explicit_selectors_always_win(self, quick_filter, approval, vehicle):
        criteria = FilterCriteria(
            quick_filter=quick_filter,
            approval_status=approval,
            vehicle_status=vehicle,
        )
        filters = build_filters(criteria)
        assert filters["approval_status"] == approval
        assert filters["vehicle_status"] == vehicle

    def test_explicit_vehicle_status_overrides_rejected_card(self):
        criteria = FilterCriteria(quick_filter=QUICK_FILTER_REJECTED, vehicle_status=1)
        payload = build_query(criteria, Pagination())
        assert payload["approval_status"] == 3
        assert payload["vehicle_status"] == 1

    def test_explicit_approval_only_keeps_card_vehicle_status(self):
        criteria = FilterCriteria(quick_filter=QUICK_FILTER_PENDING, approval_status=1)
        filters = build_filters(criteria)
        assert filters == {"approval_status": 1, "vehicle_status": 0}

    def test_zero_is_an_explicit_value(self):
        criteria = FilterCriteria(quick_filter=QUICK_FILTER_REJECTED, approval_status=0)
        assert build_filters(criteria)["approval_status"] == 0


class TestOmission:
    def test_empty_criteria_has_no_optional_keys(self):
        payload = build_query(FilterCriteria(), Pagination())
        assert payload == {"page": 1, "size": 10}
        assert not _OPTIONAL_KEYS & payload.keys()

    def test_no_null_placeholders(self):
        criteria = FilterCriteria(vehicle_type="Van")
        payload = build_query(criteria, Pagination())
        assert None not in payload.values()
        assert payload["vehicle_type"] == "Van"

    def test_missing_date_bound_is_omitted(self):
        start = datetime(2024, 3, 1, tzinfo=timezone.utc)
        filters = build_filters(FilterCriteria(date_range=(start, None)))
        assert filters == {"mtime_from": 1709251200000}


class TestFieldMapping:
    def test_all_dimensions(self):
        criteria = FilterCriteria(
            committed_search_term="ABC123",
            date_range=(
                datetime(2024, 1, 1, tzinfo=timezone.utc),
                datetime(2024, 1, 31, 23, 59, 59, tzinfo=timezone.utc),
            ),
            vehicle_type="Taxi",
            passenger_capacity_min=2,
            passenger_capacity_max=8,
        )
        filters = build_filters(criteria)
        assert filters == {
            "license_plate": "ABC123",
            "mtime_from": 1704067200000,
            "mtime_to": 1706745599000,
            "vehicle_type": "Taxi",
            "passenger_capacity_min": 2,
            "passenger_capacity_max": 8,
        }

    def test_naive_dates_read_as_utc(self):
        filters = build_filters(FilterCriteria(date_range=(datetime(2024, 1, 1), None)))
        assert filters["mtime_from"] == 1704067200000

    def test_inverted_capacity_passes_through(self):
        criteria = FilterCriteria(passenger_capacity_min=50, passenger_capacity_max=10)
        filters = build_filters(criteria)
        assert filters["passenger_capacity_min"] == 50
        assert filters["passenger_capacity_max"] == 10

    def test_capacity_zero_is_sent(self):
        filters = build_filters(FilterCriteria(passenger_capacity_min=0))
        assert filters == {"passenger_capacity_min": 0}


class TestPagination:
    def test_page_and_sort(self):
        pagination = Pagination(current_page=3, page_size=25, sort=SortSpec("driver", "descend"))
        payload = build_query(FilterCriteria(), pagination)
        assert payload == {"page": 3, "size": 25, "sortBy": "driver", "sortOrder": "descend"}

    def test_incomplete_sort_is_omitted(self):
        payload = build_query(FilterCriteria(), Pagination(sort=SortSpec("driver", None)))
        assert "sortBy" not in payload
        assert "sortOrder" not in payload

    def test_build_is_pure(self):
        state = initial_state()
        first = build_state_query(state)
        first["page"] = 99
        assert build_state_query(state) == {"page": 1, "size": 10}
