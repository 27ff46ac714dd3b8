"""
Readiness gate for pgtest.

Repeatedly runs a liveness probe with exponentially growing pauses until it
succeeds or an elapsed-time budget runs out.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Iterator, Optional

logger = logging.getLogger(__name__)


class ReadinessTimeoutError(Exception):
    """Raised when a probe does not succeed within the elapsed-time budget."""

    def __init__(self, message: str, attempts: int = 0, elapsed: float = 0.0):
        super().__init__(message)
        self.attempts = attempts
        self.elapsed = elapsed


class ExponentialBackoff:
    """
    Backoff policy without jitter.

    Intervals start at initial_interval and grow by multiplier up to
    max_interval. The only stop condition is max_elapsed.
    """

    def __init__(
        self,
        initial_interval: float = 0.5,
        multiplier: float = 1.5,
        max_interval: float = 5.0,
        max_elapsed: float = 10.0,
        clock: Callable[[], float] = time.monotonic
    ):
        if initial_interval <= 0 or max_interval <= 0 or max_elapsed <= 0:
            raise ValueError("Backoff intervals and elapsed budget must be positive")
        if multiplier < 1:
            raise ValueError("Backoff multiplier must be at least 1")

        self.initial_interval = initial_interval
        self.multiplier = multiplier
        self.max_interval = max_interval
        self.max_elapsed = max_elapsed
        self.clock = clock

    def intervals(self) -> Iterator[float]:
        """Yield the un-truncated sequence of pauses."""
        interval = min(self.initial_interval, self.max_interval)
        while True:
            yield interval
            interval = min(interval * self.multiplier, self.max_interval)


def _probe_failed(attempt: int, elapsed: float, error: Optional[BaseException]):
    if error is not None:
        logger.debug(f"Readiness probe attempt {attempt} failed after {elapsed:.2f}s: {error}")
    else:
        logger.debug(f"Readiness probe attempt {attempt} not ready after {elapsed:.2f}s")


def _timeout(backoff: ExponentialBackoff, attempts: int, elapsed: float,
             last_error: Optional[BaseException]) -> ReadinessTimeoutError:
    message = f"not ready after {elapsed:.1f}s ({attempts} attempts, budget {backoff.max_elapsed}s)"
    if last_error is not None:
        message += f": {last_error}"
    logger.warning(f"Readiness gate gave up: {message}")
    return ReadinessTimeoutError(message, attempts=attempts, elapsed=elapsed)


def retry(
    probe: Callable[[], Any],
    backoff: Optional[ExponentialBackoff] = None,
    sleep: Callable[[float], None] = time.sleep
) -> int:
    """
    Block until probe() returns a truthy value.

    A falsy return value or an exception counts as a failed attempt.

    Args:
        probe: Zero-argument liveness check
        backoff: Backoff policy, defaults to ExponentialBackoff()
        sleep: Function used to pause between attempts

    Returns:
        Number of attempts made

    Raises:
        ReadinessTimeoutError: If the elapsed budget is spent first
    """
    backoff = backoff or ExponentialBackoff()
    started = backoff.clock()
    last_error: Optional[BaseException] = None

    for attempt, interval in enumerate(backoff.intervals(), start=1):
        try:
            if probe():
                return attempt
            last_error = None
        except Exception as e:
            last_error = e

        elapsed = backoff.clock() - started
        _probe_failed(attempt, elapsed, last_error)

        remaining = backoff.max_elapsed - elapsed
        if remaining <= 0:
            raise _timeout(backoff, attempt, elapsed, last_error) from last_error
        sleep(min(interval, remaining))


async def async_retry(
    probe: Callable[[], Awaitable[Any]],
    backoff: Optional[ExponentialBackoff] = None
) -> int:
    """
    Await probe() until it returns a truthy value.

    Same contract as retry(), for coroutine probes.
    """
    backoff = backoff or ExponentialBackoff()
    started = backoff.clock()
    last_error: Optional[BaseException] = None

    for attempt, interval in enumerate(backoff.intervals(), start=1):
        try:
            if await probe():
                return attempt
            last_error = None
        except Exception as e:
            last_error = e

        elapsed = backoff.clock() - started
        _probe_failed(attempt, elapsed, last_error)

        remaining = backoff.max_elapsed - elapsed
        if remaining <= 0:
            raise _timeout(backoff, attempt, elapsed, last_error) from last_error
        await asyncio.sleep(min(interval, remaining))
