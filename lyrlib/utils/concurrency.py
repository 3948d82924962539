"""Asyncio helpers for bounding and retrying provider calls.

Two patterns are exposed:

1. **with_timeout** -- races a provider call against a deadline.  On expiry
   the caller gets :class:`RequestTimeoutError` immediately; the provider call
   is *not* cancelled (the provider boundary has no cancellation channel), it
   keeps running in the background and its eventual result is discarded.

2. **retry_with_backoff** -- a caller-level exponential-backoff loop around a
   whole client call.  Only errors flagged ``retryable`` (rate limiting and
   timeouts) are retried; validation, not-found and provider errors surface
   on the first attempt.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

import structlog

from lyrlib.utils.errors import LyrlibError, RateLimitError, RequestTimeoutError
from lyrlib.utils.logging import get_logger

_T = TypeVar("_T")

# Strong references to provider calls that lost the race.  The event loop only
# keeps weak references to tasks, so without this set an abandoned call could
# be garbage-collected mid-flight.
_ABANDONED_TASKS: set[asyncio.Task[Any]] = set()

_logger: structlog.BoundLogger = get_logger(__name__)


def _discard_late_outcome(task: asyncio.Task[Any]) -> None:
    _ABANDONED_TASKS.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        _logger.debug("abandoned_call_failed", error=str(exc))
    else:
        _logger.debug("abandoned_call_completed")


def _abandon(task: asyncio.Task[Any]) -> None:
    _ABANDONED_TASKS.add(task)
    task.add_done_callback(_discard_late_outcome)


async def with_timeout(
    operation: Callable[[], Awaitable[_T]],
    timeout: float,
    provider_name: str | None = None,
) -> _T:
    """Run ``operation()`` and wait at most *timeout* seconds for it.

    Parameters
    ----------
    operation:
        Zero-argument callable returning an awaitable (typically a bound
        provider coroutine wrapped in a lambda).
    timeout:
        Deadline in seconds.
    provider_name:
        Attached to the timeout error for log and error-response context.

    Returns
    -------
    _T
        Whatever the operation returned, if it settled first.

    Raises
    ------
    RequestTimeoutError
        If the deadline passed first.  The operation's outcome is unknown.
    Exception
        Whatever the operation raised, if it settled first.
    """
    task = asyncio.ensure_future(operation())
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
    except asyncio.CancelledError:
        _abandon(task)
        raise

    if task in done:
        return task.result()

    _abandon(task)
    _logger.warning("provider_call_timeout", timeout=timeout, provider=provider_name)
    raise RequestTimeoutError(
        message=f"Request timed out after {timeout:g} seconds",
        provider_name=provider_name,
    )


async def retry_with_backoff(
    operation: Callable[[], Awaitable[_T]],
    max_retries: int = 3,
    base_delay: float = 1.0,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> _T:
    """Call ``operation()`` until it succeeds or fails non-retryably.

    The delay before retry *n* (0-based) is ``base_delay * 2**n``, raised to
    the limiter's ``retry_after`` hint when the failure was a rate limit.

    Parameters
    ----------
    operation:
        Zero-argument callable returning an awaitable, e.g.
        ``lambda: client.search(query)``.
    max_retries:
        Retries after the first attempt; ``0`` disables retrying.
    base_delay:
        Initial backoff delay in seconds.
    sleep:
        Injectable sleep coroutine (tests pass a recorder).

    Raises
    ------
    LyrlibError
        The last error once retries are exhausted, or the first
        non-retryable error.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except LyrlibError as exc:
            if not exc.retryable or attempt >= max_retries:
                raise

            delay = base_delay * (2 ** attempt)
            if isinstance(exc, RateLimitError):
                delay = max(delay, exc.retry_after)

            _logger.info(
                "retrying_after_error",
                attempt=attempt + 1,
                max_retries=max_retries,
                delay=round(delay, 3),
                error_kind=exc.kind.value,
            )
            await sleep(delay)
            attempt += 1
