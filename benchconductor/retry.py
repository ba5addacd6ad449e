"""Retrying an operation a fixed number of times."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import CancelledError
from typing import Callable, Optional, TypeVar

T = TypeVar("T")

_ATTEMPTS = 3
_RETRY_DELAY = 0.5

_log = logging.getLogger(__name__)


def handle_silently(attempt: int, err: BaseException) -> None:
    """Error handler that emits no warning; the failure is only traced at debug level."""
    _log.debug("attempt %d failed: %s", attempt, err)


def on_error(
    log: logging.Logger,
    prefix: str,
    fn: Callable[[], T],
    cancel: Optional[threading.Event] = None,
) -> T:
    """Retry ``fn``, logging a warning for every failed attempt."""

    def _warn(attempt: int, err: BaseException) -> None:
        log.warning("%s error at attempt %d: %s", prefix, attempt, err)

    return on_error_with_handler(_warn, fn, cancel)


def on_error_with_handler(
    handler: Callable[[int, BaseException], None],
    fn: Callable[[], T],
    cancel: Optional[threading.Event] = None,
) -> T:
    """Call ``fn`` up to three times and return its first successful result.

    ``handler`` is called with the attempt number and the exception after each
    failure. The last exception is raised once all attempts have failed. If
    ``cancel`` is set before an attempt, :class:`CancelledError` is raised.
    """
    last_err: Optional[Exception] = None
    for attempt in range(1, _ATTEMPTS + 1):
        if cancel is not None and cancel.is_set():
            raise CancelledError("operation cancelled")
        if attempt > 1:
            time.sleep(_RETRY_DELAY)
        try:
            return fn()
        except Exception as err:  # noqa: BLE001 - every failure is retried
            last_err = err
            handler(attempt, err)
    assert last_err is not None
    raise last_err