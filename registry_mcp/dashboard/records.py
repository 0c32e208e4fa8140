"""Server-owned registry records and their tolerant payload parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from registry_mcp.normalization import parse_int, parse_text


@dataclass(frozen=True)
class Trip:
    """One trip endpoint pair."""
    origin: str
    destination: str


@dataclass(frozen=True)
class VehicleRecord:
    """A single vehicle row as reported by the registry.

    Statuses arrive as display strings even though filters send numeric codes.
    """
    id: str
    license_plate: str = ""
    driver: str = ""
    vehicle_type: str = ""
    vehicle_status: str = ""
    approval_status: str = ""
    vehicle_owner: str = ""
    trips: tuple[Trip, ...] = ()
    passenger_capacity: int | None = None
    contact_number: str = ""
    country_code: str = ""
    ctime: int | None = None
    mtime: int | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> VehicleRecord:
        raw_trips = payload.get("trips")
        trips: tuple[Trip, ...] = ()
        if isinstance(raw_trips, list):
            trips = tuple(
                Trip(parse_text(t.get("from")), parse_text(t.get("to")))
                for t in raw_trips
                if isinstance(t, dict)
            )
        return cls(
            id=parse_text(payload.get("id")),
            license_plate=parse_text(payload.get("license_plate")),
            driver=parse_text(payload.get("driver")),
            vehicle_type=parse_text(payload.get("vehicle_type")),
            vehicle_status=parse_text(payload.get("vehicle_status")),
            approval_status=parse_text(payload.get("approval_status")),
            vehicle_owner=parse_text(payload.get("vehicle_owner")),
            trips=trips,
            passenger_capacity=parse_int(payload.get("passenger_capacity")),
            contact_number=parse_text(payload.get("contact_number")),
            country_code=parse_text(payload.get("country_code")),
            ctime=parse_int(payload.get("ctime")),
            mtime=parse_int(payload.get("mtime")),
        )


@dataclass(frozen=True)
class HighlightCounts:
    """Unfiltered totals per approval bucket."""
    draft: int = 0
    pending: int = 0
    rejected: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> HighlightCounts:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            return cls()
        return cls(
            draft=parse_int(data.get("total_draft")) or 0,
            pending=parse_int(data.get("total_pending")) or 0,
            rejected=parse_int(data.get("total_rejected")) or 0,
        )


@dataclass(frozen=True)
class VehicleListResult:
    """One page of records plus the server's total row count."""
    records: tuple[VehicleRecord, ...] = field(default_factory=tuple)
    total: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> VehicleListResult:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            return cls()
        raw_result = data.get("result")
        records: tuple[VehicleRecord, ...] = ()
        if isinstance(raw_result, list):
            records = tuple(
                VehicleRecord.from_payload(r) for r in raw_result if isinstance(r, dict)
            )
        return cls(records=records, total=parse_int(data.get("total")) or 0)
