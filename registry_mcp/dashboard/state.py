"""Dashboard filter/pagination state and its reducer.

State is immutable; every user action is an event dataclass and
:func:`reduce` is the only way to move from one state to the next.  The
returned :class:`Transition` says whether the list must be refetched, so the
refetch-trigger set is an explicit, enumerable contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Union

from registry_mcp.constants import (
    APPROVAL_STATUSES,
    DEFAULT_PAGE_SIZE,
    QUICK_FILTERS,
    SORT_ORDERS,
    VEHICLE_STATUSES,
    VEHICLE_TYPES,
)

DateRange = tuple[Union[datetime, None], Union[datetime, None]]


# ── State ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FilterCriteria:
    """Independent filter dimensions.

    ``passenger_capacity_min`` may exceed ``passenger_capacity_max``; both are
    passed through to the server unchanged.
    """
    quick_filter: str | None = None
    committed_search_term: str = ""
    date_range: DateRange | None = None
    vehicle_type: str | None = None
    passenger_capacity_min: int | None = None
    passenger_capacity_max: int | None = None
    approval_status: int | None = None
    vehicle_status: int | None = None


@dataclass(frozen=True)
class SortSpec:
    column: str | None = None
    order: str | None = None

    @property
    def active(self) -> bool:
        return bool(self.column and self.order)


@dataclass(frozen=True)
class Pagination:
    """1-based page cursor; ``total`` is only ever written from a fetch result."""
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0
    sort: SortSpec = field(default_factory=SortSpec)


@dataclass(frozen=True)
class DashboardState:
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    pagination: Pagination = field(default_factory=Pagination)
    search_input: str = ""

    @property
    def selected_card(self) -> str | None:
        return self.criteria.quick_filter


def initial_state(page_size: int = DEFAULT_PAGE_SIZE) -> DashboardState:
    """Return an empty dashboard state on the first page."""
    _validate_page_size(page_size)
    return DashboardState(pagination=Pagination(page_size=page_size))


# ── Events ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class QuickFilterToggled:
    card: str


@dataclass(frozen=True)
class SearchInputChanged:
    text: str


@dataclass(frozen=True)
class SearchCommitted:
    """Enter pressed: the in-progress text becomes the committed term.

    Surrounding whitespace is stripped, so committing blank text removes the
    plate filter.
    """


@dataclass(frozen=True)
class DateRangeChanged:
    start: datetime | None = None
    end: datetime | None = None


@dataclass(frozen=True)
class VehicleTypeChanged:
    vehicle_type: str | None = None


@dataclass(frozen=True)
class PassengerCapacityMinChanged:
    value: int | None = None


@dataclass(frozen=True)
class PassengerCapacityMaxChanged:
    value: int | None = None


@dataclass(frozen=True)
class ApprovalStatusChanged:
    status: int | None = None


@dataclass(frozen=True)
class VehicleStatusChanged:
    status: int | None = None


@dataclass(frozen=True)
class PageChanged:
    """Page, page-size or sort change reported by the list widget."""
    page: int
    page_size: int | None = None
    sort_column: str | None = None
    sort_order: str | None = None


@dataclass(frozen=True)
class FiltersCleared:
    pass


DashboardEvent = Union[
    QuickFilterToggled,
    SearchInputChanged,
    SearchCommitted,
    DateRangeChanged,
    VehicleTypeChanged,
    PassengerCapacityMinChanged,
    PassengerCapacityMaxChanged,
    ApprovalStatusChanged,
    VehicleStatusChanged,
    PageChanged,
    FiltersCleared,
]

# Refetch when the event changed state.
REFETCH_ON_CHANGE: tuple[type, ...] = (
    QuickFilterToggled,
    DateRangeChanged,
    VehicleTypeChanged,
    PassengerCapacityMinChanged,
    PassengerCapacityMaxChanged,
    ApprovalStatusChanged,
    VehicleStatusChanged,
)

# Refetch unconditionally.
REFETCH_ALWAYS: tuple[type, ...] = (
    SearchCommitted,
    PageChanged,
    FiltersCleared,
)


@dataclass(frozen=True)
class Transition:
    state: DashboardState
    refetch: bool


# ── Validation ──────────────────────────────────────────────────────


def _validate_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")


def _validate_capacity(value: int | None) -> None:
    if value is not None and value < 0:
        raise ValueError(f"Passenger capacity cannot be negative, got {value}")


def _validate_code(value: int | None, options: dict[int, str], label: str) -> None:
    if value is not None and value not in options:
        allowed = ", ".join(f"{code}={name}" for code, name in options.items())
        raise ValueError(f"Unknown {label} {value}. Expected one of: {allowed}")


# ── Reducer ─────────────────────────────────────────────────────────


def _with_criteria(state: DashboardState, **changes) -> DashboardState:
    return replace(state, criteria=replace(state.criteria, **changes))


def _toggle_quick_filter(state: DashboardState, card: str) -> DashboardState:
    if card not in QUICK_FILTERS:
        raise ValueError(
            f"Unknown quick filter '{card}'. Expected one of: {', '.join(QUICK_FILTERS)}"
        )
    selected = None if state.criteria.quick_filter == card else card
    # Selecting a card resets the date range and the search box, including
    # any plate already committed from it.
    return replace(
        _with_criteria(
            state, quick_filter=selected, date_range=None, committed_search_term=""
        ),
        search_input="",
    )


def _change_page(state: DashboardState, event: PageChanged) -> DashboardState:
    if event.page < 1:
        raise ValueError(f"page must be at least 1, got {event.page}")
    page_size = state.pagination.page_size if event.page_size is None else event.page_size
    _validate_page_size(page_size)
    if event.sort_order is not None and event.sort_order not in SORT_ORDERS:
        raise ValueError(
            f"sort_order must be one of {sorted(SORT_ORDERS)}, got '{event.sort_order}'"
        )
    pagination = replace(
        state.pagination,
        current_page=event.page,
        page_size=page_size,
        sort=SortSpec(column=event.sort_column or None, order=event.sort_order),
    )
    return replace(state, pagination=pagination)


def _clear_filters(state: DashboardState) -> DashboardState:
    return DashboardState(
        pagination=replace(state.pagination, current_page=1, sort=SortSpec()),
    )


def _apply(state: DashboardState, event: DashboardEvent) -> DashboardState:
    if isinstance(event, QuickFilterToggled):
        return _toggle_quick_filter(state, event.card)
    if isinstance(event, SearchInputChanged):
        return replace(state, search_input=event.text)
    if isinstance(event, SearchCommitted):
        return _with_criteria(state, committed_search_term=state.search_input.strip())
    if isinstance(event, DateRangeChanged):
        if event.start is None and event.end is None:
            return _with_criteria(state, date_range=None)
        return _with_criteria(state, date_range=(event.start, event.end))
    if isinstance(event, VehicleTypeChanged):
        if event.vehicle_type is not None and event.vehicle_type not in VEHICLE_TYPES:
            raise ValueError(
                f"Unknown vehicle type '{event.vehicle_type}'. "
                f"Expected one of: {', '.join(VEHICLE_TYPES)}"
            )
        return _with_criteria(state, vehicle_type=event.vehicle_type)
    if isinstance(event, PassengerCapacityMinChanged):
        _validate_capacity(event.value)
        return _with_criteria(state, passenger_capacity_min=event.value)
    if isinstance(event, PassengerCapacityMaxChanged):
        _validate_capacity(event.value)
        return _with_criteria(state, passenger_capacity_max=event.value)
    if isinstance(event, ApprovalStatusChanged):
        _validate_code(event.status, APPROVAL_STATUSES, "approval status")
        return _with_criteria(state, approval_status=event.status)
    if isinstance(event, VehicleStatusChanged):
        _validate_code(event.status, VEHICLE_STATUSES, "vehicle status")
        return _with_criteria(state, vehicle_status=event.status)
    if isinstance(event, PageChanged):
        return _change_page(state, event)
    if isinstance(event, FiltersCleared):
        return _clear_filters(state)
    raise TypeError(f"Unsupported dashboard event: {event!r}")


def reduce(state: DashboardState, event: DashboardEvent) -> Transition:
    """Apply *event* to *state* and report whether the list must be refetched."""
    new_state = _apply(state, event)
    if isinstance(event, REFETCH_ALWAYS):
        refetch = True
    elif isinstance(event, REFETCH_ON_CHANGE):
        refetch = new_state != state
    else:
        refetch = False
    return Transition(state=new_state, refetch=refetch)


def with_total(state: DashboardState, total: int) -> DashboardState:
    """Record the row count reported by a successful fetch."""
    return replace(state, pagination=replace(state.pagination, total=max(total, 0)))
