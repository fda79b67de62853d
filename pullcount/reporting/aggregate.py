"""Per-author grouping of repository events."""

from __future__ import annotations

import collections
import typing as typ

from pullcount.github.models import Action, EventType

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pullcount.github.models import EventRecord

type EventsPerAuthor = dict[str, list[EventRecord]]


def events_per_author(events: cabc.Iterable[EventRecord]) -> EventsPerAuthor:
    """Group pull request, review comment and issue comment events by author.

    Events of any other type are dropped, so an author appears only when they
    have at least one retained event. Bucket order carries no meaning.

    Examples
    --------
    >>> events_per_author([])
    {}

    """
    grouped: collections.defaultdict[str, list[EventRecord]] = (
        collections.defaultdict(list)
    )
    for event in events:
        if event.is_pull_request_activity:
            grouped[event.actor.login].append(event)
    return dict(grouped)


def _count(
    events: cabc.Iterable[EventRecord], event_type: EventType, action: Action
) -> int:
    return sum(
        1 for event in events if event.event_type is event_type and event.action is action
    )


def count_opened(events: cabc.Iterable[EventRecord]) -> int:
    """Count pull requests opened."""
    return _count(events, EventType.PULL_REQUEST, Action.OPENED)


def count_commented(events: cabc.Iterable[EventRecord]) -> int:
    """Count issue and pull request conversation comments created."""
    return _count(events, EventType.ISSUE_COMMENT, Action.CREATED)


def count_closed(events: cabc.Iterable[EventRecord]) -> int:
    """Count pull requests closed (merged or not)."""
    return _count(events, EventType.PULL_REQUEST, Action.CLOSED)
