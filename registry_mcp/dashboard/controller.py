"""Fetch orchestration for the vehicle dashboard.

The controller owns the live :class:`DashboardState`, the visible page of
records and the shared ``loading`` flag.  Events go through the reducer; a
transition that asks for a refetch issues exactly one list request.

Failures degrade silently: they are logged, ``loading`` is released and the
last good records stay visible.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from registry_mcp.clients.registry import RegistryClient, RegistryClientError
from registry_mcp.constants import DEFAULT_PAGE_SIZE
from registry_mcp.dashboard.query import build_state_query
from registry_mcp.dashboard.records import HighlightCounts, VehicleRecord
from registry_mcp.dashboard.state import (
    DashboardEvent,
    FiltersCleared,
    SearchCommitted,
    SearchInputChanged,
    initial_state,
    reduce,
    with_total,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], RegistryClient]


class HighlightsFetcher:
    """Fetches the global highlight counts; the request body is always empty."""

    def __init__(self, client_factory: ClientFactory) -> None:
        self._client_factory = client_factory
        self.counts: HighlightCounts | None = None

    async def fetch(self) -> HighlightCounts | None:
        try:
            async with self._client_factory() as client:
                counts = await client.get_highlights()
        except RegistryClientError as exc:
            logger.error("Error fetching vehicle highlights (%s): %s", exc.code, exc)
            return self.counts
        self.counts = counts
        return counts


class FetchController:
    """Applies dashboard events and decides when the vehicle list is refetched."""

    def __init__(
        self,
        client_factory: ClientFactory,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        highlights_on_refetch: bool = False,
    ) -> None:
        self._client_factory = client_factory
        self.highlights_on_refetch = highlights_on_refetch
        self.state = initial_state(page_size)
        self.records: tuple[VehicleRecord, ...] = ()
        self.loading = False
        self.last_payload: dict[str, Any] | None = None
        self._highlights = HighlightsFetcher(client_factory)
        self._sequence = 0

    @property
    def highlights(self) -> HighlightCounts | None:
        return self._highlights.counts

    async def start(self) -> None:
        """Initial mount: load highlights and the first page together."""
        await asyncio.gather(self._highlights.fetch(), self.refresh())

    async def dispatch(self, event: DashboardEvent) -> bool:
        """Reduce *event*; returns True when it triggered a list fetch."""
        transition = reduce(self.state, event)
        self.state = transition.state
        if not transition.refetch:
            return False
        if self.highlights_on_refetch:
            await asyncio.gather(self.refresh(), self._highlights.fetch())
        else:
            await self.refresh()
        return True

    async def commit_search(self, text: str | None = None) -> bool:
        """Enter pressed in the search box, optionally with new text."""
        if text is not None:
            await self.dispatch(SearchInputChanged(text))
        return await self.dispatch(SearchCommitted())

    async def clear_filters(self) -> bool:
        return await self.dispatch(FiltersCleared())

    async def refresh_highlights(self) -> HighlightCounts | None:
        return await self._highlights.fetch()

    async def refresh(self) -> bool:
        """Fetch the page for the current state snapshot.

        Returns True when the response was applied.  A response is dropped if
        a newer request was dispatched while it was in flight.
        """
        self._sequence += 1
        sequence = self._sequence
        payload = build_state_query(self.state)
        self.last_payload = payload
        self.loading = True
        try:
            async with self._client_factory() as client:
                result = await client.get_all_vehicles(payload)
        except RegistryClientError as exc:
            logger.error("Error fetching vehicle data (%s): %s", exc.code, exc)
            return False
        finally:
            # Only the latest request owns the spinner.
            if sequence == self._sequence:
                self.loading = False

        if sequence != self._sequence:
            logger.debug(
                "Discarding stale vehicle page (request %d, latest %d)",
                sequence,
                self._sequence,
            )
            return False

        self.records = result.records
        self.state = with_total(self.state, result.total)
        return True
