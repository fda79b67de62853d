"""Builders for raw repository events pages.

The events API returns JSON arrays of objects shaped like the ones built here;
only the fields pullcount reads are populated, plus a few it must ignore.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import json
import typing as typ

import httpx

from pullcount.github.client import EventPage
from pullcount.github.models import Action, Actor, EventRecord, EventType

_BASE_TIME = dt.datetime(2016, 12, 1, 16, 26, 43, tzinfo=dt.UTC)


def raw_event(
    login: str,
    event_type: str | None = "PullRequestEvent",
    action: object = "opened",
    *,
    created_at: str = "2016-12-01T16:26:43Z",
) -> dict[str, typ.Any]:
    """Return one raw event object as served by the events API.

    ``event_type=None`` omits ``type``; ``action=None`` omits ``payload.action``.
    """
    payload: dict[str, typ.Any] = {"number": 1}
    if action is not None:
        payload["action"] = action
    event: dict[str, typ.Any] = {
        "id": "4966355584",
        "actor": {"id": 1, "login": login, "url": f"https://api.github.com/users/{login}"},
        "repo": {"id": 42, "name": "my-org/my-repo"},
        "payload": payload,
        "public": True,
        "created_at": created_at,
    }
    if event_type is not None:
        event["type"] = event_type
    return event


def page_body(events: list[dict[str, typ.Any]]) -> bytes:
    """Serialise raw events into a page body."""
    return json.dumps(events).encode("utf-8")


def link_header(repo_id: int, page: int, last: int) -> str:
    """Return a GitHub-style ``Link`` header for ``page`` of ``last`` pages."""
    base = f"https://api.github.com/repositories/{repo_id}/events"
    entries = []
    if page > 1:
        entries.append(f'<{base}?page={page - 1}>; rel="prev"')
    if page < last:
        entries.append(f'<{base}?page={page + 1}>; rel="next"')
    entries.append(f'<{base}?page={last}>; rel="last"')
    if page > 1:
        entries.append(f'<{base}?page=1>; rel="first"')
    return ", ".join(entries)


def event_record(
    login: str,
    event_type: EventType = EventType.PULL_REQUEST,
    action: Action = Action.OPENED,
) -> EventRecord:
    """Return a decoded event record."""
    return EventRecord(
        actor=Actor(login=login),
        event_type=event_type,
        action=action,
        created_at=_BASE_TIME,
    )


@dataclasses.dataclass(slots=True)
class FakePageFetcher:
    """Deterministic PageFetcher serving pre-built pages per repository.

    ``pages[repo]`` lists what successive ``fetch_page`` calls return: an
    :class:`EventPage`, ``None`` for a terminal response, or an exception to
    raise.
    """

    pages: dict[str, list[EventPage | BaseException | None]]
    calls: list[tuple[str, int]] = dataclasses.field(default_factory=list)

    async def fetch_page(self, repo: str, page: int) -> EventPage | None:
        """Return the scripted response for ``page`` of ``repo``."""
        self.calls.append((repo, page))
        scripted = self.pages[repo]
        response = scripted[min(page, len(scripted)) - 1]
        if isinstance(response, BaseException):
            raise response
        return response

    def pages_requested(self, repo: str) -> list[int]:
        """Return the page numbers requested for ``repo`` in call order."""
        return [page for called_repo, page in self.calls if called_repo == repo]


def event_page(
    page: int,
    events: list[dict[str, typ.Any]],
    *,
    last: int | None = None,
    link: str | None = None,
) -> EventPage:
    """Return an EventPage, with a ``Link`` header pointing at ``last`` if given."""
    header = link if link is not None else (
        link_header(128516862, page, last) if last is not None else None
    )
    return EventPage(page=page, body=page_body(events), link_header=header)


def mock_http_client(
    handler: typ.Callable[[httpx.Request], httpx.Response],
) -> httpx.AsyncClient:
    """Return an AsyncClient routed through ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
