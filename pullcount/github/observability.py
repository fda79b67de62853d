"""Observability primitives for repository event fetches.

Provides structured logging and error categorization for each repository's
fetch run. All events are emitted as ``[event.type] key=value`` log lines
suitable for parsing by log aggregators.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import typing as typ

from pullcount.config import ConfigError

from .errors import (
    GitHubConnectionError,
    GitHubContentError,
    GitHubDecodeError,
)

if typ.TYPE_CHECKING:
    import datetime as dt

    from .models import RepositoryEvents

logger = logging.getLogger(__name__)

# HTTP status code threshold for server errors (5xx)
_HTTP_SERVER_ERROR_THRESHOLD = 500


class FetchEventType(enum.StrEnum):
    """Structured log event types for fetch observability."""

    RUN_STARTED = "fetch.run.started"
    RUN_COMPLETED = "fetch.run.completed"
    RUN_FAILED = "fetch.run.failed"


class ErrorCategory(enum.StrEnum):
    """Categories for error classification in alerts."""

    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


@dataclasses.dataclass(frozen=True, slots=True)
class FetchRunContext:
    """Shared context for a single repository fetch run."""

    repo_slug: str
    started_at: dt.datetime


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubConnectionError, ErrorCategory.TRANSIENT),
    (GitHubDecodeError, ErrorCategory.SCHEMA_DRIFT),
    (ConfigError, ErrorCategory.CONFIGURATION),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception for alerting purposes.

    Returns:
        ErrorCategory indicating the type of failure for alert routing.

    """
    if isinstance(exc, GitHubContentError):
        if exc.status_code >= _HTTP_SERVER_ERROR_THRESHOLD:
            return ErrorCategory.TRANSIENT
        return ErrorCategory.CLIENT_ERROR

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return ErrorCategory.UNKNOWN


class FetchEventLogger:
    """Emit structured fetch events via Python logging.

    Events are emitted at INFO level for start and success and at ERROR for
    failures.
    """

    def log_run_started(self, context: FetchRunContext) -> None:
        """Log fetch run start."""
        logger.info(
            "[%s] repo_slug=%s started_at=%s",
            FetchEventType.RUN_STARTED,
            context.repo_slug,
            context.started_at.isoformat(),
        )

    def log_run_completed(
        self,
        context: FetchRunContext,
        result: RepositoryEvents,
        duration: dt.timedelta,
    ) -> None:
        """Log successful fetch completion with page and event counts."""
        logger.info(
            "[%s] repo_slug=%s duration_seconds=%.3f pages_fetched=%d "
            "events_fetched=%d",
            FetchEventType.RUN_COMPLETED,
            context.repo_slug,
            duration.total_seconds(),
            result.pages_fetched,
            len(result.events),
        )

    def log_run_failed(
        self,
        context: FetchRunContext,
        error: BaseException,
        duration: dt.timedelta,
    ) -> None:
        """Log failed fetch run with stage and error categorization.

        The line carries the error type and message; no traceback is attached.
        """
        logger.error(
            "[%s] repo_slug=%s duration_seconds=%.3f error_type=%s "
            "error_stage=%s error_category=%s error_message=%s",
            FetchEventType.RUN_FAILED,
            context.repo_slug,
            duration.total_seconds(),
            type(error).__name__,
            getattr(error, "stage", None),
            categorize_error(error),
            str(error),
        )
