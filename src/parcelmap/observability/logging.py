"""Logging for interaction cycles.

Every click or search runs inside `bind_cycle(seq)`, so each record
emitted while that cycle is on the event loop carries its sequence
number. Overlapping cycles stay apart because the number lives in a
ContextVar and follows the await chain of the task that set it.

JSON records group the coordinate and query extras that the retrieval
modules attach into one `location` object.
"""

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from parcelmap.config import Settings

cycle_seq: ContextVar[int | None] = ContextVar("cycle_seq", default=None)

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(cycle)s): %(message)s"

_LOCATION_FIELDS = ("latitude", "longitude", "query")


@contextmanager
def bind_cycle(seq: int) -> Iterator[None]:
    """Tag every record logged inside the block with cycle `seq`."""
    token = cycle_seq.set(seq)
    try:
        yield
    finally:
        cycle_seq.reset(token)


def cycle_label() -> str:
    seq = cycle_seq.get()
    return f"cycle-{seq}" if seq is not None else "-"


class CycleFilter(logging.Filter):
    """Expose the active cycle as `%(cycle)s` for text output."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.cycle = cycle_label()
        return True


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        seq = cycle_seq.get()
        if seq is not None:
            entry["seq"] = seq

        location = {
            key: getattr(record, key)
            for key in _LOCATION_FIELDS
            if getattr(record, key, None) is not None
        }
        if location:
            entry["location"] = location

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(config: "Settings") -> None:
    """Install one stderr handler on the root logger per `config.log_json` / `config.log_level`."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.addFilter(CycleFilter())
    if config.log_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)

    for noisy in ("httpx", "httpcore", "mlflow"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
