"""Location state: the single source of truth the view renders from."""

from parcelmap.state.location import LocationStore

__all__ = ["LocationStore"]
