"""parcelmap CLI: look up the parcel at an address or a coordinate.

    parcelmap "350 5th Ave, New York, NY"
    parcelmap-at 40.7484 -73.9857

The console widget stands in for the map: it prints viewport moves,
the marker popup on every state change, and user notices.
"""

import asyncio
import logging
import sys
from typing import TextIO

from parcelmap.config import settings
from parcelmap.core.types import Coordinate, InvalidInput, LocationState, Notice
from parcelmap.observability.logging import setup_logging
from parcelmap.observability.tracing import init_tracking
from parcelmap.pipeline.coordinator import InteractionCoordinator
from parcelmap.retrieval.client import GeoQueryClient
from parcelmap.state.location import LocationStore
from parcelmap.view.renderer import ClickHandler, ViewRenderer

logger = logging.getLogger(__name__)


class ConsoleMapWidget:
    """Text rendition of the map widget."""

    def __init__(self, out: TextIO | None = None):
        self._out = out or sys.stdout
        self._click_handler: ClickHandler | None = None

    def set_view(self, center: Coordinate, zoom: int) -> None:
        print(
            f"[map] centered at {center.latitude:.6f}, {center.longitude:.6f} (zoom {zoom})",
            file=self._out,
        )

    def render_marker(self, at: Coordinate, panel: list[str]) -> None:
        print(f"{'─' * 50}", file=self._out)
        for line in panel:
            print(f"  {line}", file=self._out)

    def on_click(self, handler: ClickHandler) -> None:
        self._click_handler = handler

    def show_notice(self, notice: Notice) -> None:
        print(f"[!] {notice.message}", file=self._out)

    def click(self, lat: float, lng: float) -> None:
        """Simulate a map click."""
        if self._click_handler is None:
            raise RuntimeError("No click handler registered")
        self._click_handler(lat, lng)


def initial_state() -> LocationState:
    """Default focus from settings, no parcel yet."""
    return LocationState(
        focus=Coordinate(settings.default_latitude, settings.default_longitude),
        zoom=settings.default_zoom,
    )


async def _session(widget: ConsoleMapWidget, *, address: str | None = None,
                   point: tuple[float, float] | None = None) -> LocationState:
    """Run one search or click cycle against the console widget."""
    async with GeoQueryClient() as client:
        coordinator = InteractionCoordinator(client, LocationStore(initial_state()))
        view = ViewRenderer(widget, coordinator)
        try:
            if address is not None:
                view.submit_search(address)
            elif point is not None:
                widget.click(*point)
            await coordinator.wait()
            return coordinator.store.snapshot
        finally:
            view.close()


def _init() -> None:
    setup_logging(settings)
    init_tracking(settings.mlflow_tracking_uri, settings.mlflow_experiment_name)


def main() -> None:
    """Look up the parcel at an address: parcelmap <address>"""
    if len(sys.argv) < 2:
        print("Usage: parcelmap <address>")
        print('  Example: parcelmap "350 5th Ave, New York, NY"')
        sys.exit(1)

    _init()
    address = " ".join(sys.argv[1:])
    print("\nParcel Search")
    print(f"{'=' * 50}")
    print(f"Looking up: {address}\n")
    asyncio.run(_session(ConsoleMapWidget(), address=address))


def at_main() -> None:
    """Look up the parcel at a coordinate: parcelmap-at <lat> <lng>"""
    if len(sys.argv) != 3:
        print("Usage: parcelmap-at <lat> <lng>")
        print("  Example: parcelmap-at 40.7484 -73.9857")
        sys.exit(1)

    try:
        point = (float(sys.argv[1]), float(sys.argv[2]))
        Coordinate(*point)
    except (ValueError, InvalidInput) as e:
        print(f"Invalid coordinate: {e}")
        sys.exit(1)

    _init()
    asyncio.run(_session(ConsoleMapWidget(), point=point))


if __name__ == "__main__":
    main()
