"""Shared test fixtures — fake registry backend, session singleton reset."""

from __future__ import annotations

from typing import Any

import pytest

from registry_mcp.clients.registry import RegistryClientError
from registry_mcp.dashboard.controller import FetchController
from registry_mcp.dashboard.records import HighlightCounts, VehicleListResult
from registry_mcp.data.session import set_controller


def make_vehicle_payload(i: int, **overrides: Any) -> dict[str, Any]:
    record = {
        "id": f"VH-{i:03d}",
        "license_plate": f"ABC{i:03d}",
        "driver": f"Driver {i}",
        "vehicle_type": "Bus",
        "vehicle_status": "Active",
        "approval_status": "Approved",
        "vehicle_owner": "Metro Transit",
        "trips": [{"from": "Depot", "to": "Airport"}],
        "passenger_capacity": 40,
        "contact_number": "5550100",
        "country_code": "+1",
        "ctime": 1_700_000_000_000,
        "mtime": 1_700_000_500_000,
    }
    record.update(overrides)
    return record


def make_page(count: int = 2, total: int | None = None) -> VehicleListResult:
    return VehicleListResult.from_payload(
        {
            "data": {
                "result": [make_vehicle_payload(i) for i in range(count)],
                "total": count if total is None else total,
            }
        }
    )


class FakeRegistryBackend:
    """Records every request; serves queued pages, counts or errors."""

    def __init__(self) -> None:
        self.list_payloads: list[dict[str, Any]] = []
        self.highlight_calls = 0
        self.pages: list[VehicleListResult | Exception] = []
        self.default_page = make_page()
        self.counts: HighlightCounts | Exception = HighlightCounts(draft=4, pending=2, rejected=1)

    def fail_next(self, code: str = "HTTP_ERROR") -> None:
        self.pages.append(RegistryClientError("boom", code=code, status=500))

    def client(self) -> _FakeRegistryClient:
        return _FakeRegistryClient(self)


class _FakeRegistryClient:
    def __init__(self, backend: FakeRegistryBackend) -> None:
        self._backend = backend

    async def __aenter__(self) -> _FakeRegistryClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        return None

    async def get_all_vehicles(self, payload: dict[str, Any]) -> VehicleListResult:
        self._backend.list_payloads.append(dict(payload))
        page = self._backend.pages.pop(0) if self._backend.pages else self._backend.default_page
        if isinstance(page, Exception):
            raise page
        return page

    async def get_highlights(self) -> HighlightCounts:
        self._backend.highlight_calls += 1
        if isinstance(self._backend.counts, Exception):
            raise self._backend.counts
        return self._backend.counts


@pytest.fixture()
def backend() -> FakeRegistryBackend:
    return FakeRegistryBackend()


@pytest.fixture()
def controller(backend: FakeRegistryBackend) -> FetchController:
    """A controller wired to the fake backend (not yet mounted)."""
    return FetchController(backend.client)


@pytest.fixture(autouse=True)
def _reset_session():
    """Give every test a clean session singleton."""
    set_controller(None)
    yield
    set_controller(None)
