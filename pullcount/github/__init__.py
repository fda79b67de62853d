"""GitHub repository event retrieval."""

from __future__ import annotations

from .client import EventPage, GitHubEventsClient, PageFetcher, last_page_from_link_header
from .coordinator import collect_repository_events, run_collection
from .errors import (
    EventFetchError,
    FetchStage,
    GitHubConnectionError,
    GitHubContentError,
    GitHubDecodeError,
)
from .models import (
    Action,
    Actor,
    EventRecord,
    EventType,
    RepositoryEvents,
    RepositoryFailure,
    decode_events,
)
from .observability import (
    ErrorCategory,
    FetchEventLogger,
    FetchEventType,
    FetchRunContext,
    categorize_error,
)
from .pagination import fetch_repository_events

__all__ = [
    "Action",
    "Actor",
    "ErrorCategory",
    "EventFetchError",
    "EventPage",
    "EventRecord",
    "EventType",
    "FetchEventLogger",
    "FetchEventType",
    "FetchRunContext",
    "FetchStage",
    "GitHubConnectionError",
    "GitHubContentError",
    "GitHubDecodeError",
    "GitHubEventsClient",
    "PageFetcher",
    "RepositoryEvents",
    "RepositoryFailure",
    "categorize_error",
    "collect_repository_events",
    "decode_events",
    "fetch_repository_events",
    "last_page_from_link_header",
    "run_collection",
]
