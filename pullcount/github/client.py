"""GitHub REST client for the repository events endpoint.

One call fetches one page. The client holds no pagination state; the caller
decides which page to ask for next from the ``Link`` header returned alongside
each page (see :mod:`pullcount.github.pagination`).
"""

from __future__ import annotations

import dataclasses
import re
import typing as typ
from http import HTTPStatus

import httpx

from pullcount.logging import get_logger, log_debug

from .errors import GitHubConnectionError, GitHubContentError

if typ.TYPE_CHECKING:
    from types import TracebackType

    from pullcount.config import GitHubEventsConfig

logger = get_logger(__name__)

_API_VERSION = "2022-11-28"

# GitHub answers 422 once a page lies beyond what the events API will serve.
_TERMINAL_STATUSES = frozenset({HTTPStatus.NO_CONTENT, HTTPStatus.UNPROCESSABLE_ENTITY})

# Bodies no longer than an empty JSON array carry no events.
_EMPTY_PAGE_LENGTH = len(b"[]")

_LINK_ENTRY_RE = re.compile(r'<(?P<url>[^>]*)>\s*;\s*rel="(?P<rel>[^"]*)"')


@dataclasses.dataclass(frozen=True, slots=True)
class EventPage:
    """Raw body and continuation metadata for one fetched page."""

    page: int
    body: bytes
    link_header: str | None


class PageFetcher(typ.Protocol):
    """Interface for fetching a single events page."""

    async def fetch_page(self, repo: str, page: int) -> EventPage | None:
        """Return the page, or ``None`` when the stream has no more content."""
        ...


def last_page_from_link_header(link_header: str | None) -> int | None:
    """Return the page number of the ``rel="last"`` entry of a ``Link`` header.

    Examples
    --------
    >>> last_page_from_link_header(
    ...     '<https://api.github.com/repositories/1/events?page=2>; rel="next", '
    ...     '<https://api.github.com/repositories/1/events?page=5>; rel="last"'
    ... )
    5
    >>> last_page_from_link_header("moo") is None
    True

    """
    if not link_header:
        return None
    for match in _LINK_ENTRY_RE.finditer(link_header):
        if "last" not in match.group("rel").split():
            continue
        try:
            raw_page = httpx.URL(match.group("url")).params.get("page")
        except httpx.InvalidURL:
            return None
        if raw_page is None:
            return None
        try:
            return int(raw_page)
        except ValueError:
            return None
    return None


class GitHubEventsClient:
    """Fetch pages of ``GET /repos/{owner}/{name}/events``."""

    def __init__(
        self,
        config: GitHubEventsConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            follow_redirects=True,
        )
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": config.user_agent,
            "X-GitHub-Api-Version": _API_VERSION,
        }
        if config.token is not None:
            headers["Authorization"] = f"Bearer {config.token}"
        self._headers = headers

    async def __aenter__(self) -> typ.Self:
        """Return the client for use in ``async with`` blocks."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close owned HTTP resources on exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    def events_url(self, repo: str) -> str:
        """Return the events endpoint for ``repo``."""
        return f"{self._config.api_url}/repos/{repo}/events"

    async def fetch_page(self, repo: str, page: int) -> EventPage | None:
        """Fetch one events page.

        Parameters
        ----------
        repo
            Repository slug in ``owner/name`` form.
        page
            1-based page number.

        Returns
        -------
        EventPage | None
            The page body and ``Link`` header, or ``None`` when GitHub reports
            no more content (an empty array, 204, or 422).

        Raises
        ------
        GitHubConnectionError
            If the request fails at the transport level.
        GitHubContentError
            If GitHub answers with any other non-2xx status.

        """
        try:
            response = await self._client.get(
                self.events_url(repo),
                params={"page": page},
                headers=self._headers,
            )
        except httpx.TransportError as exc:
            raise GitHubConnectionError.unreachable(repo, page, exc) from exc

        if response.status_code in _TERMINAL_STATUSES:
            log_debug(
                logger,
                "No more content for %r (page number: %d, status: %d)",
                repo,
                page,
                response.status_code,
            )
            return None
        if not response.is_success:
            raise GitHubContentError.http_error(repo, page, response.status_code)

        body = response.content
        if len(body.strip()) <= _EMPTY_PAGE_LENGTH:
            log_debug(logger, "No more content for %r (page number: %d)", repo, page)
            return None

        log_debug(
            logger,
            "Content found for %r (page number: %d, %d bytes)",
            repo,
            page,
            len(body),
        )
        return EventPage(page=page, body=body, link_header=response.headers.get("Link"))
