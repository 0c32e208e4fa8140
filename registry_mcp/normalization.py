"""Shared normalization helpers for registry payloads and tool inputs.

Imported by the dashboard reducer (tool inputs), the record parser
(server payloads) and the list view (trip rendering).
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any


def parse_int(value: Any) -> int | None:
    """Best-effort integer parsing.  Returns ``None`` for empty, non-finite or unparseable input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            return int(stripped)
        except ValueError:
            pass
        try:
            parsed = float(stripped)
        except ValueError:
            return None
        return int(parsed) if math.isfinite(parsed) else None
    return None


def parse_text(value: Any) -> str:
    """Coerce a display field to ``str``; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return str(value)


def to_epoch_ms(value: datetime) -> int:
    """Millisecond epoch for *value*; naive datetimes are read as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 string or millisecond epoch into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        millis = parse_int(text) if text.lstrip("-").isdigit() else None
        if millis is not None:
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"Invalid date '{value}'. Use ISO-8601 or epoch milliseconds.") from exc
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    raise ValueError(f"Invalid date '{value}'. Use ISO-8601 or epoch milliseconds.")


def format_trips(trips: list[tuple[str, str]]) -> str:
    """Render trip endpoints as ``"A to B, C to D"``."""
    return ", ".join(f"{origin} to {destination}" for origin, destination in trips)
