"""Utility modules for lyrlib.

- **errors** -- Exception hierarchy rooted at LyrlibError; every subclass is
  tagged with an ErrorKind and a ``retryable`` flag.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **similarity** -- Normalized Levenshtein similarity used for scoring.
- **validation** (not re-exported here) -- Query validation and per-call
  option coercion.
- **rate_limiter** (not re-exported here) -- Fixed-window request governor.
- **concurrency** (not re-exported here) -- Timeout race and caller-level
  retry with exponential backoff.
"""

# -- Exception hierarchy ---------------------------------------------------
from lyrlib.utils.errors import (
    ConfigurationError,
    ErrorKind,
    LyrlibError,
    NotFoundError,
    ProviderError,
    RateLimitError,
    RequestTimeoutError,
    ValidationError,
)

# -- Structured logging setup ----------------------------------------------
from lyrlib.utils.logging import configure_logging, get_logger

# -- String similarity -----------------------------------------------------
from lyrlib.utils.similarity import similarity

__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "LyrlibError",
    "NotFoundError",
    "ProviderError",
    "RateLimitError",
    "RequestTimeoutError",
    "ValidationError",
    "configure_logging",
    "get_logger",
    "similarity",
]
