"""ViewRenderer: binds a map widget to the store and the coordinator.

The widget only draws and reports raw events. The renderer turns state
snapshots into viewport/marker calls and raw clicks into coordinator
triggers; it makes no lookup decisions of its own.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from parcelmap.core.types import Coordinate, InvalidInput, LocationState, Notice
from parcelmap.pipeline.coordinator import InteractionCoordinator
from parcelmap.view.details import popup_lines

logger = logging.getLogger(__name__)

ClickHandler = Callable[[float, float], None]


class MapWidget(Protocol):
    def set_view(self, center: Coordinate, zoom: int) -> None: ...

    def render_marker(self, at: Coordinate, panel: list[str]) -> None: ...

    def on_click(self, handler: ClickHandler) -> None: ...

    def show_notice(self, notice: Notice) -> None: ...


def _wrap_longitude(lng: float) -> float:
    """Bring a longitude from a wrapped world copy back into [-180, 180]."""
    if -180.0 <= lng <= 180.0:
        return lng
    return ((lng + 180.0) % 360.0) - 180.0


class ViewRenderer:
    def __init__(self, widget: MapWidget, coordinator: InteractionCoordinator):
        self._widget = widget
        self._coordinator = coordinator
        self._shown_focus: Coordinate | None = None

        store = coordinator.store
        self._unsubscribers = [
            store.subscribe(self.render),
            coordinator.subscribe_notices(widget.show_notice),
        ]
        widget.on_click(self._handle_click)
        self.render(store.snapshot)

    def render(self, state: LocationState) -> None:
        # fly to the new focus only when it moved
        if state.focus != self._shown_focus:
            self._widget.set_view(state.focus, state.zoom)
            self._shown_focus = state.focus
        self._widget.render_marker(state.focus, popup_lines(state))

    def _handle_click(self, lat: float, lng: float) -> None:
        try:
            coord = Coordinate(latitude=lat, longitude=_wrap_longitude(lng))
        except InvalidInput as e:
            logger.warning("Ignoring click outside the map: %s", e)
            return
        logger.info("Clicked at: %s, %s", coord.latitude, coord.longitude)
        self._coordinator.submit_click(coord)

    def submit_search(self, text: str) -> asyncio.Task | None:
        return self._coordinator.submit_search(text)

    def close(self) -> None:
        """Detach from the store and notices (view teardown)."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
