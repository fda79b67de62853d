"""Page-by-page traversal of a repository's event stream.

Pages are fetched strictly in order because each page's ``Link`` header decides
whether the next one is requested. The walk stops when:

- the fetcher reports no more content (empty array, 204 or 422),
- the ``Link`` header has no usable ``rel="last"`` entry,
- the current page is the advertised last page, or
- ``max_pages`` pages have been fetched.

Errors propagate to the caller; a failed walk never returns partial events.
"""

from __future__ import annotations

import typing as typ

import msgspec

from pullcount.config import MAX_PAGES
from pullcount.logging import get_logger, log_trace, log_warning

from .client import last_page_from_link_header
from .errors import GitHubDecodeError
from .models import EventRecord, RepositoryEvents, decode_events

if typ.TYPE_CHECKING:
    from .client import EventPage, PageFetcher

logger = get_logger(__name__)


def _decode_page(repo: str, page: EventPage) -> list[EventRecord]:
    try:
        return decode_events(page.body)
    except msgspec.DecodeError as exc:
        raise GitHubDecodeError.malformed_page(repo, page.page, exc) from exc


async def fetch_repository_events(
    fetcher: PageFetcher,
    repo: str,
    *,
    max_pages: int = MAX_PAGES,
) -> RepositoryEvents:
    """Fetch and decode every available events page for ``repo``.

    Parameters
    ----------
    fetcher
        Page source, normally a :class:`~pullcount.github.GitHubEventsClient`.
    repo
        Repository slug in ``owner/name`` form.
    max_pages
        Safety cap on the number of fetches for this repository.

    Returns
    -------
    RepositoryEvents
        Records from every fetched page, in delivery order.

    Raises
    ------
    EventFetchError
        If any page cannot be fetched or decoded.

    """
    events: list[EventRecord] = []
    pages_fetched = 0
    for page_number in range(1, max_pages + 1):
        page = await fetcher.fetch_page(repo, page_number)
        pages_fetched += 1
        if page is None:
            break

        events.extend(_decode_page(repo, page))

        last_page = last_page_from_link_header(page.link_header)
        log_trace(
            logger, "Last page: %r (current page: %d)", last_page, page_number
        )
        if last_page is None or page_number >= last_page:
            break
    else:
        log_warning(
            logger,
            "Stopped fetching %r after %d pages; more pages were advertised",
            repo,
            max_pages,
        )

    return RepositoryEvents(
        repo=repo, events=tuple(events), pages_fetched=pages_fetched
    )
