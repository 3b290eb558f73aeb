"""LocationStore: holds the current LocationState snapshot.

Pure data holder with an update/subscribe contract. It never talks to
the network and never looks at sequence numbers; deciding which result
is allowed to land here is the coordinator's job.
"""

import dataclasses
import logging
from collections.abc import Callable

from parcelmap.core.types import LocationState

logger = logging.getLogger(__name__)

Listener = Callable[[LocationState], None]


class LocationStore:
    def __init__(self, initial: LocationState):
        self._state = initial
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> LocationState:
        return self._state

    def update(self, **changes) -> LocationState:
        """Replace the snapshot with a copy carrying `changes`, then notify.

        Raises:
            TypeError: a change names a field LocationState does not have.
        """
        self._state = dataclasses.replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Location state listener %r failed", listener)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register for change notifications. Returns an unsubscribe handle."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
