"""Error categorisation for backend failures.

The backend never retries. Callers use :func:`categorize_error` to decide
whether a failure is worth retrying (``TRANSIENT``) or points at a broken
integration that a retry cannot fix.
"""

from __future__ import annotations

import enum

from .errors import (
    BackendError,
    ExtractError,
    GitHubConfigError,
    TemplateError,
    TransportError,
)


class ErrorCategory(enum.StrEnum):
    """Categories for error classification in logs and exit messages."""

    TRANSIENT = "transient"
    INVALID_RESPONSE = "invalid_response"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (ExtractError, ErrorCategory.SCHEMA_DRIFT),
    (TemplateError, ErrorCategory.CONFIGURATION),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception, looking through :class:`BackendError`."""
    if isinstance(exc, BackendError):
        return categorize_error(exc.cause)

    # Transport errors split on their kind rather than their type.
    if isinstance(exc, TransportError):
        if exc.kind == TransportError.NETWORK:
            return ErrorCategory.TRANSIENT
        return ErrorCategory.INVALID_RESPONSE

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return ErrorCategory.UNKNOWN


def is_retryable(exc: BaseException) -> bool:
    """Return True when retrying the same call could succeed."""
    return categorize_error(exc) is ErrorCategory.TRANSIENT
