"""Shared pieces for the in-memory view services."""

from contextlib import contextmanager
import logging
import time

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Malformed user input rejected before any AI call is made."""


class ViewBusyError(RuntimeError):
    """A view already has an AI call in flight."""


class BusyFlag:
    """
    Per-view "is busy" gate.

    Handlers run on a single event loop, so checking and setting the flag
    before the first await is atomic with respect to other handlers.
    """

    def __init__(self, view: str):
        self.view = view
        self.is_busy = False

    @contextmanager
    def hold(self):
        if self.is_busy:
            logger.warning(f"Rejected request: {self.view} is busy")
            raise ViewBusyError(f"{self.view} is already processing a request")
        self.is_busy = True
        try:
            yield
        finally:
            self.is_busy = False


_last_record_id = 0


def next_record_id() -> int:
    """Millisecond timestamp id, bumped when two records share a millisecond."""
    global _last_record_id
    record_id = int(time.time() * 1000)
    if record_id <= _last_record_id:
        record_id = _last_record_id + 1
    _last_record_id = record_id
    return record_id


def require(value: str, message: str) -> str:
    """Return the stripped value, or raise InvalidInputError if it is blank."""
    if not value or not value.strip():
        raise InvalidInputError(message)
    return value.strip()
