"""Interaction coordinator: map clicks and searches to location state.

One cycle per user trigger:

  click:  LookingUp → Settled | Failed
  search: Resolving → (NotFound → Idle) | LookingUp → Settled | Failed

Every trigger takes the next sequence number. Results are compared
against the latest issued number when they arrive and dropped if a newer
trigger exists, so a slow earlier lookup can never overwrite a faster
later one. Nothing here locks: the event loop is single-threaded and the
only discipline is compare-and-discard at settlement.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from enum import Enum
from typing import Any, Protocol

from parcelmap.core.types import (
    Coordinate,
    Notice,
    NoticeKind,
    Outcome,
    OutcomeKind,
    ParcelRecord,
)
from parcelmap.observability.logging import bind_cycle
from parcelmap.observability.tracing import trace
from parcelmap.state.location import LocationStore

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Address not found!"
BLANK_SEARCH_MESSAGE = "Enter an address to search."
GEOCODE_FAILED_MESSAGE = "Address search failed. Please try again."
LOOKUP_FAILED_MESSAGE = "Could not load parcel details. Please try again."


class Phase(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    LOOKING_UP = "looking_up"
    SETTLED = "settled"
    FAILED = "failed"


class GeoQuery(Protocol):
    """What the coordinator needs from the lookup client."""

    async def geocode(self, query: str) -> Outcome[Coordinate]: ...

    async def lookup_parcel(self, coord: Coordinate) -> Outcome[ParcelRecord]: ...


NoticeListener = Callable[[Notice], None]


class InteractionCoordinator:
    """Drives click/search cycles and owns the sequence counter."""

    def __init__(self, client: GeoQuery, store: LocationStore):
        self._client = client
        self._store = store
        self._seq = 0
        self._phase = Phase.IDLE
        self._notice_listeners: list[NoticeListener] = []
        self._pending: asyncio.Task | None = None

    @property
    def store(self) -> LocationStore:
        return self._store

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def latest_seq(self) -> int:
        return self._seq

    # ------------------------------------------------------------------
    # Notices
    # ------------------------------------------------------------------

    def subscribe_notices(self, listener: NoticeListener) -> Callable[[], None]:
        """Register for user-visible notices. Returns an unsubscribe handle."""
        self._notice_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._notice_listeners:
                self._notice_listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: NoticeKind, message: str) -> None:
        notice = Notice(kind=kind, message=message)
        logger.info("Notice: %s (%s)", message, kind.value)
        for listener in list(self._notice_listeners):
            try:
                listener(notice)
            except Exception:
                logger.exception("Notice listener %r failed", listener)

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    @trace(name="map_click", span_type="CHAIN")
    async def click(self, coord: Coordinate) -> None:
        """Handle a map click: focus moves immediately, then the lookup runs."""
        seq = self._issue()
        self._begin_lookup(coord)
        await self._run_lookup(seq, coord)

    @trace(name="address_search", span_type="CHAIN")
    async def search(self, text: str) -> None:
        """Handle a search submit: geocode, then continue as a click."""
        if self._reject_blank(text):
            return
        seq = self._issue()
        self._begin_search()
        await self._run_search(seq, text)

    def submit_click(self, coord: Coordinate) -> asyncio.Task:
        """Start a click cycle as a task, cancelling the superseded one.

        Focus is updated before this returns.
        """
        self._cancel_pending()
        seq = self._issue()
        self._begin_lookup(coord)
        return self._track(self._run_lookup(seq, coord))

    def submit_search(self, text: str) -> asyncio.Task | None:
        """Start a search cycle as a task. Blank text starts nothing."""
        if self._reject_blank(text):
            return None
        self._cancel_pending()
        seq = self._issue()
        self._begin_search()
        return self._track(self._run_search(seq, text))

    async def wait(self) -> None:
        """Wait until the most recently submitted cycle has finished."""
        while self._pending is not None and not self._pending.done():
            await asyncio.wait({self._pending})

    # ------------------------------------------------------------------
    # Cycle internals
    # ------------------------------------------------------------------

    def _issue(self) -> int:
        self._seq += 1
        return self._seq

    def _is_current(self, seq: int) -> bool:
        return seq == self._seq

    def _reject_blank(self, text: str) -> bool:
        if text and text.strip():
            return False
        logger.info("Ignoring blank search")
        self._notify(NoticeKind.INVALID_INPUT, BLANK_SEARCH_MESSAGE)
        return True

    def _track(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        self._pending = asyncio.ensure_future(coro)
        return self._pending

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
            logger.debug("Cancelled superseded cycle")

    def _begin_search(self) -> None:
        """Enter Resolving. A lookup this search supersedes no longer owns `loading`."""
        self._phase = Phase.RESOLVING
        if self._store.snapshot.loading:
            self._store.update(loading=False)

    def _begin_lookup(self, coord: Coordinate) -> None:
        """Move focus to coord and show loading. Must run before any await."""
        self._phase = Phase.LOOKING_UP
        self._store.update(focus=coord, parcel=None, loading=True)

    async def _run_lookup(self, seq: int, coord: Coordinate) -> None:
        with bind_cycle(seq):
            logger.info(
                "Fetching parcel at %s, %s", coord.latitude, coord.longitude,
                extra={"latitude": coord.latitude, "longitude": coord.longitude},
            )
            try:
                outcome = await self._client.lookup_parcel(coord)
            except Exception as e:
                logger.exception("Parcel lookup raised instead of returning an outcome")
                outcome = Outcome.transport_error(str(e))
            self._settle(seq, outcome)

    async def _run_search(self, seq: int, text: str) -> None:
        with bind_cycle(seq):
            logger.info("Searching address: %s", text, extra={"query": text})
            try:
                outcome = await self._client.geocode(text)
            except Exception as e:
                logger.exception("Geocoder raised instead of returning an outcome")
                outcome = Outcome.transport_error(str(e))

            if not self._is_current(seq):
                logger.info("Discarding stale geocode result")
                return

            if outcome.kind is OutcomeKind.FOUND:
                coord = outcome.value
                self._begin_lookup(coord)
            else:
                self._resolve_failed(outcome)
                return

        await self._run_lookup(seq, coord)

    def _resolve_failed(self, outcome: Outcome[Coordinate]) -> None:
        """Geocoding ended without a coordinate; focus and parcel stay put."""
        if outcome.kind is OutcomeKind.TRANSPORT_ERROR:
            self._phase = Phase.FAILED
            self._notify(NoticeKind.TRANSPORT_ERROR, GEOCODE_FAILED_MESSAGE)
        else:
            self._phase = Phase.IDLE
            self._notify(NoticeKind.NOT_FOUND, NOT_FOUND_MESSAGE)

    def _settle(self, seq: int, outcome: Outcome[ParcelRecord]) -> None:
        if not self._is_current(seq):
            logger.info(
                "Discarding stale parcel lookup (seq=%d, latest=%d)", seq, self._seq,
            )
            return

        if outcome.kind is OutcomeKind.TRANSPORT_ERROR:
            self._phase = Phase.FAILED
            self._store.update(parcel=None, loading=False)
            self._notify(NoticeKind.TRANSPORT_ERROR, LOOKUP_FAILED_MESSAGE)
        elif outcome.kind is OutcomeKind.FOUND:
            self._phase = Phase.SETTLED
            self._store.update(parcel=outcome.value, loading=False)
        else:
            self._phase = Phase.SETTLED
            self._store.update(parcel=None, loading=False)
        logger.info("Settled %s", outcome.kind.value)
