"""Back-off retry strategies used to reconnect the data channel."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, TypeVar

_T = TypeVar("_T")

_log = logging.getLogger(__name__)

SLEEP_CONSTANT = 2


def retry(attempts: int, sleep: float, fn: Callable[[], _T]) -> _T | None:
    """Call fn up to attempts times, doubling the sleep (in seconds) after each failure.

    Returns fn's result on the first success and re-raises the last error once
    every attempt has failed. With no attempts at all, fn is never called.
    """
    _log.info("Retrying connection to channel")
    last_error: Exception | None = None
    while attempts > 0:
        attempts -= 1
        try:
            return fn()
        except Exception as exc:
            last_error = exc
            time.sleep(sleep)
            sleep *= SLEEP_CONSTANT
            _log.debug("%s attempts to connect web socket connection.", attempts)
    if last_error is not None:
        raise last_error
    return None


@dataclass
class RepeatableExponentialRetryer:
    """Retries an operation with exponential delays that restart once they grow too long."""

    callable_func: Callable[[], object]
    geometric_ratio: float
    initial_delay_in_milli: int
    max_delay_in_milli: int
    max_attempts: int

    def next_sleep_time(self, attempt: int) -> timedelta:
        """Delay before the retry following the given attempt, truncated to whole milliseconds."""
        millis = int(float(self.initial_delay_in_milli) * self.geometric_ratio ** attempt)
        return timedelta(milliseconds=millis)

    def call(self) -> object:
        """Call the operation, retrying on error until it succeeds or attempts run out."""
        attempt = 0
        failed_attempts = 0
        while True:
            try:
                return self.callable_func()
            except Exception:
                if failed_attempts == self.max_attempts:
                    raise
            sleep = self.next_sleep_time(attempt)
            if sleep // timedelta(milliseconds=1) > self.max_delay_in_milli:
                attempt = 0
                sleep = self.next_sleep_time(attempt)
            time.sleep(sleep.total_seconds())
            attempt += 1
            failed_attempts += 1