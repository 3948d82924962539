"""Custom exception hierarchy for lyrlib.

All library exceptions inherit from :class:`LyrlibError`, which carries an
optional ``provider_name`` so error handlers can identify which external
service (e.g. "lrclib") caused the failure.

The hierarchy is a closed set of kinds:

    LyrlibError  (base -- catch-all for any lyrlib error)
    +-- ValidationError      (bad input shape, never retryable)
    +-- NotFoundError        (provider confirmed absence)
    +-- RateLimitError       (request governor tripped, carries retry_after)
    +-- RequestTimeoutError  (deadline exceeded, outcome unknown)
    +-- ProviderError        (unexpected failure from the provider)
    +-- ConfigurationError   (invalid client options)

Every subclass is tagged with an :class:`ErrorKind` so callers (the API
middleware, the retry helper) can dispatch on ``exc.kind`` explicitly rather
than catching a generic failure.
"""

from __future__ import annotations

import math
from enum import Enum


class ErrorKind(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Tag identifying which branch of the hierarchy an error belongs to."""

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMIT_EXCEEDED"
    TIMEOUT = "TIMEOUT"
    PROVIDER = "PROVIDER_ERROR"
    CONFIGURATION = "CONFIGURATION_ERROR"


class LyrlibError(Exception):
    """Base exception for all lyrlib errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[lrclib] Request timeout``.
    """

    kind: ErrorKind = ErrorKind.PROVIDER
    retryable: bool = False

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Caller errors
# ---------------------------------------------------------------------------

class ValidationError(LyrlibError):
    """Raised when a query or formatting request has an invalid shape.

    The message names the violated constraint.  Never retryable.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Invalid input parameters",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(LyrlibError):
    """Raised when client options are invalid at construction time."""

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Lookup outcomes
# ---------------------------------------------------------------------------

class NotFoundError(LyrlibError):
    """Raised when the provider confirms that no lyrics exist for a query."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str = "Lyrics not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RateLimitError(LyrlibError):
    """Raised when the client-side request governor is exhausted.

    ``retry_after`` is the number of seconds until the current window
    closes.  Callers may retry once the hint has elapsed.
    """

    kind = ErrorKind.RATE_LIMITED
    retryable = True

    def __init__(
        self,
        message: str | None = None,
        retry_after: float = 0.0,
        provider_name: str | None = None,
    ) -> None:
        self._retry_after = max(0.0, retry_after)
        if message is None:
            message = (
                f"Rate limit exceeded. Try again in "
                f"{math.ceil(self._retry_after)} seconds."
            )
        super().__init__(message=message, provider_name=provider_name)

    @property
    def retry_after(self) -> float:
        return self._retry_after


class RequestTimeoutError(LyrlibError):
    """Raised when a provider call does not settle before its deadline.

    The outcome of the underlying call is unknown, not a confirmed failure.
    """

    kind = ErrorKind.TIMEOUT
    retryable = True

    def __init__(
        self,
        message: str = "Request timeout",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderError(LyrlibError):
    """Raised when the external provider fails unexpectedly.

    The original exception is preserved as ``__cause__`` by raising with
    ``raise ProviderError(...) from exc``; :attr:`cause` exposes it.
    """

    kind = ErrorKind.PROVIDER

    def __init__(
        self,
        message: str = "Lyrics provider request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__
