"""Shared async vehicle-registry API client."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, TypeVar

import aiohttp

from registry_mcp.constants import HIGHLIGHTS_PATH, LIST_VEHICLES_PATH
from registry_mcp.dashboard.records import HighlightCounts, VehicleListResult

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 15.0

T = TypeVar("T")


class RegistryClientError(RuntimeError):
    """Raised for registry request failures with structured metadata."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status = status
        self.details = details or {}


def _parse(path: str, parser: Callable[[Any], T], data: dict[str, Any]) -> T:
    """Run a payload parser; any failure is a malformed response."""
    try:
        return parser(data)
    except (TypeError, ValueError, AttributeError, OverflowError) as exc:
        raise RegistryClientError(
            "Registry returned a body that could not be parsed.",
            code="MALFORMED_RESPONSE",
            details={"path": path, "error": str(exc)},
        ) from exc


class RegistryClient:
    """Async client for the registry's POST/JSON endpoints.

    No retries: a request either resolves or raises once.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session: aiohttp.ClientSession | None = None
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def __aenter__(self) -> RegistryClient:
        self.session = aiohttp.ClientSession(
            headers={"Content-Type": "application/json"},
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self.session:
            await self.session.close()

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        if not self.session:
            raise RuntimeError("Client not entered as context manager")

        url = f"{self.base_url}{path}"
        try:
            async with self.session.post(
                url,
                json=body,
                timeout=self._timeout,
            ) as resp:
                raw_text = await resp.text()
                if resp.status >= 400:
                    raise RegistryClientError(
                        f"Registry request failed with HTTP {resp.status}.",
                        code="HTTP_ERROR",
                        status=resp.status,
                        details={"path": path, "response": raw_text[:500]},
                    )
                try:
                    payload = json.loads(raw_text) if raw_text else {}
                except json.JSONDecodeError as exc:
                    raise RegistryClientError(
                        "Registry returned a body that is not JSON.",
                        code="MALFORMED_RESPONSE",
                        status=resp.status,
                        details={"path": path, "response": raw_text[:500]},
                    ) from exc
                if not isinstance(payload, dict):
                    raise RegistryClientError(
                        "Registry returned a JSON body that is not an object.",
                        code="MALFORMED_RESPONSE",
                        status=resp.status,
                        details={"path": path},
                    )
                return payload
        except RegistryClientError:
            raise
        except TimeoutError as exc:
            raise RegistryClientError(
                "Registry request timed out.",
                code="TIMEOUT",
                details={"path": path},
            ) from exc
        except aiohttp.ClientError as exc:
            logger.error("Registry client error (%s): %s", path, exc)
            raise RegistryClientError(
                "Registry request failed due to a network/client error.",
                code="NETWORK_ERROR",
                details={"path": path, "error": str(exc)},
            ) from exc

    async def get_all_vehicles(self, payload: dict[str, Any]) -> VehicleListResult:
        """Fetch one page of vehicles for a built query payload."""
        data = await self._post(LIST_VEHICLES_PATH, payload)
        return _parse(LIST_VEHICLES_PATH, VehicleListResult.from_payload, data)

    async def get_highlights(self) -> HighlightCounts:
        """Fetch global draft/pending/rejected totals (always an empty body)."""
        data = await self._post(HIGHLIGHTS_PATH, {})
        return _parse(HIGHLIGHTS_PATH, HighlightCounts.from_payload, data)
