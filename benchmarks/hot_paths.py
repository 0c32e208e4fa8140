#!/usr/bin/env python3
"""Performance benchmark for the dashboard reducer, query builder and page parsing."""

from __future__ import annotations

import argparse
import asyncio
import time
from datetime import datetime, timezone
from typing import Any

from registry_mcp.constants import QUICK_FILTERS, VEHICLE_TYPES
from registry_mcp.dashboard.controller import FetchController
from registry_mcp.dashboard.query import build_state_query
from registry_mcp.dashboard.records import VehicleListResult
from registry_mcp.dashboard.state import (
    ApprovalStatusChanged,
    DateRangeChanged,
    PageChanged,
    QuickFilterToggled,
    VehicleTypeChanged,
    initial_state,
    reduce,
)


def make_vehicle(i: int) -> dict[str, Any]:
    return {
        "id": f"BM-{i:07d}",
        "license_plate": f"PLT{i:05d}",
        "driver": f"Driver {i % 300}",
        "vehicle_type": VEHICLE_TYPES[i % 4],
        "vehicle_status": "Active" if i % 3 else "Inactive",
        "approval_status": "Approved",
        "vehicle_owner": f"Owner {i % 50}",
        "trips": [{"from": "Depot", "to": f"Stop {i % 20}"}, {"from": "A", "to": "B"}],
        "passenger_capacity": 4 + i % 40,
        "contact_number": "5550100",
        "country_code": "+1",
        "ctime": 1_700_000_000_000 + i,
        "mtime": 1_700_000_500_000 + i,
    }


def _events(i: int) -> list[Any]:
    return [
        QuickFilterToggled(QUICK_FILTERS[i % 3]),
        DateRangeChanged(
            datetime(2024, 1, 1, tzinfo=timezone.utc),
            datetime(2024, 1 + i % 12, 1, tzinfo=timezone.utc),
        ),
        VehicleTypeChanged(VEHICLE_TYPES[i % 4]),
        ApprovalStatusChanged(i % 4),
        PageChanged(page=1 + i % 30, sort_column="driver", sort_order="ascend"),
    ]


class _MemoryClient:
    """Serves one canned page without touching the network."""

    def __init__(self, page: dict[str, Any]) -> None:
        self._page = page

    async def __aenter__(self) -> _MemoryClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        return None

    async def get_all_vehicles(self, payload: dict[str, Any]) -> VehicleListResult:
        return VehicleListResult.from_payload(self._page)

    async def get_highlights(self):
        raise NotImplementedError


# ── Benchmarks ────────────────────────────────────────────────────────


def bench_reduce_and_build(repeats: int) -> tuple[float, float]:
    state = initial_state()
    start = time.perf_counter()
    for i in range(repeats):
        for event in _events(i):
            state = reduce(state, event).state
        build_state_query(state)
    elapsed = time.perf_counter() - start
    return elapsed, (elapsed / max(repeats, 1)) * 1_000_000


def bench_page_parse(rows: int, repeats: int) -> tuple[float, float]:
    page = {"data": {"result": [make_vehicle(i) for i in range(rows)], "total": rows * 10}}
    start = time.perf_counter()
    for _ in range(repeats):
        VehicleListResult.from_payload(page)
    elapsed = time.perf_counter() - start
    return elapsed, (elapsed / max(repeats, 1)) * 1000


async def bench_dispatch(rows: int, repeats: int) -> tuple[float, float]:
    page = {"data": {"result": [make_vehicle(i) for i in range(rows)], "total": rows}}
    controller = FetchController(lambda: _MemoryClient(page))
    start = time.perf_counter()
    for i in range(repeats):
        await controller.dispatch(PageChanged(page=1 + i % 30))
    elapsed = time.perf_counter() - start
    return elapsed, (elapsed / max(repeats, 1)) * 1000


# ── Main ──────────────────────────────────────────────────────────────


async def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark registry dashboard hot paths.")
    parser.add_argument("--rows", type=int, default=500)
    parser.add_argument("--repeats", type=int, default=2_000)
    args = parser.parse_args()

    print("registry_dashboard_hot_path_benchmark")
    print(f"rows={args.rows}")
    print(f"repeats={args.repeats}")
    print()

    reduce_elapsed, reduce_avg_us = bench_reduce_and_build(args.repeats)
    print(f"reduce_and_build_seconds={reduce_elapsed:.6f}")
    print(f"reduce_and_build_avg_us={reduce_avg_us:.3f}")
    print()

    parse_elapsed, parse_avg_ms = bench_page_parse(args.rows, max(args.repeats // 20, 1))
    print(f"page_parse_seconds={parse_elapsed:.6f}")
    print(f"page_parse_avg_ms={parse_avg_ms:.4f}")
    print()

    dispatch_elapsed, dispatch_avg_ms = await bench_dispatch(
        args.rows, max(args.repeats // 20, 1)
    )
    print(f"dispatch_seconds={dispatch_elapsed:.6f}")
    print(f"dispatch_avg_ms={dispatch_avg_ms:.4f}")


if __name__ == "__main__":
    asyncio.run(main())
