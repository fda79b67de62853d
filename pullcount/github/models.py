"""Typed domain models for GitHub repository events.

GitHub keeps adding event types and payload actions. Pages are decoded into a
strict wire shape for the fields every event must carry (``actor.login`` and
``created_at``) while ``type`` and ``payload.action`` are read as untyped JSON
and resolved against the known vocabulary, falling back to ``UNKNOWN``. A new
server-side value therefore never fails a page.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import enum
import typing as typ

import msgspec

if typ.TYPE_CHECKING:
    from .errors import FetchStage


class EventType(enum.StrEnum):
    """Kinds of events reported by the repository events API."""

    COMMIT_COMMENT = "CommitCommentEvent"
    CREATE = "CreateEvent"
    DELETE = "DeleteEvent"
    DEPLOYMENT = "DeploymentEvent"
    DEPLOYMENT_STATUS = "DeploymentStatusEvent"
    DISCUSSION = "DiscussionEvent"
    DOWNLOAD = "DownloadEvent"
    FOLLOW = "FollowEvent"
    FORK = "ForkEvent"
    FORK_APPLY = "ForkApplyEvent"
    GIST = "GistEvent"
    GOLLUM = "GollumEvent"
    INSTALLATION = "InstallationEvent"
    INSTALLATION_REPOSITORIES = "InstallationRepositoriesEvent"
    ISSUE_COMMENT = "IssueCommentEvent"
    ISSUES = "IssuesEvent"
    LABEL = "LabelEvent"
    MARKETPLACE_PURCHASE = "MarketplacePurchaseEvent"
    MEMBER = "MemberEvent"
    MEMBERSHIP = "MembershipEvent"
    MILESTONE = "MilestoneEvent"
    ORGANIZATION = "OrganizationEvent"
    ORG_BLOCK = "OrgBlockEvent"
    PAGE_BUILD = "PageBuildEvent"
    PROJECT_CARD = "ProjectCardEvent"
    PROJECT_COLUMN = "ProjectColumnEvent"
    PROJECT = "ProjectEvent"
    PUBLIC = "PublicEvent"
    PULL_REQUEST = "PullRequestEvent"
    PULL_REQUEST_REVIEW = "PullRequestReviewEvent"
    PULL_REQUEST_REVIEW_COMMENT = "PullRequestReviewCommentEvent"
    PULL_REQUEST_REVIEW_THREAD = "PullRequestReviewThreadEvent"
    PUSH = "PushEvent"
    RELEASE = "ReleaseEvent"
    REPOSITORY = "RepositoryEvent"
    SPONSORSHIP = "SponsorshipEvent"
    STATUS = "StatusEvent"
    TEAM = "TeamEvent"
    TEAM_ADD = "TeamAddEvent"
    WATCH = "WatchEvent"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: object) -> EventType:
        """Resolve a raw ``type`` value, returning ``UNKNOWN`` when unrecognised."""
        return _parse_member(cls, value, cls.UNKNOWN)


class Action(enum.StrEnum):
    """State transitions carried in ``payload.action``."""

    ADDED = "added"
    ASSIGNED = "assigned"
    CLOSED = "closed"
    CREATED = "created"
    DELETED = "deleted"
    EDITED = "edited"
    LABELED = "labeled"
    MERGED = "merged"
    OPENED = "opened"
    PUBLISHED = "published"
    REOPENED = "reopened"
    REVIEW_REQUESTED = "review_requested"
    REVIEW_REQUEST_REMOVED = "review_request_removed"
    STARTED = "started"
    SYNCHRONIZE = "synchronize"
    UNASSIGNED = "unassigned"
    UNLABELED = "unlabeled"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: object) -> Action:
        """Resolve a raw ``payload.action`` value, returning ``UNKNOWN`` if absent."""
        return _parse_member(cls, value, cls.UNKNOWN)


def _parse_member[E: enum.StrEnum](enum_cls: type[E], value: object, default: E) -> E:
    if not isinstance(value, str):
        return default
    try:
        return enum_cls(value)
    except ValueError:
        return default


REPORTED_EVENT_TYPES: frozenset[EventType] = frozenset(
    {
        EventType.PULL_REQUEST,
        EventType.PULL_REQUEST_REVIEW_COMMENT,
        EventType.ISSUE_COMMENT,
    }
)


class Actor(msgspec.Struct, frozen=True):
    """User who triggered an event."""

    login: str


class _WireEvent(msgspec.Struct):
    """Decoding shape for one element of an events page."""

    actor: Actor
    created_at: typ.Annotated[dt.datetime, msgspec.Meta(tz=True)]
    event_type: typ.Any = msgspec.field(default=None, name="type")
    payload: typ.Any = None


@dataclasses.dataclass(frozen=True, slots=True)
class EventRecord:
    """One decoded repository event."""

    actor: Actor
    event_type: EventType
    action: Action
    created_at: dt.datetime

    @property
    def is_pull_request_activity(self) -> bool:
        """Return whether the event counts towards pull request reports."""
        return self.event_type in REPORTED_EVENT_TYPES


def _record_from_wire(wire: _WireEvent) -> EventRecord:
    payload = wire.payload
    raw_action = payload.get("action") if isinstance(payload, dict) else None
    return EventRecord(
        actor=wire.actor,
        event_type=EventType.parse(wire.event_type),
        action=Action.parse(raw_action),
        created_at=wire.created_at.astimezone(dt.UTC),
    )


_PAGE_DECODER = msgspec.json.Decoder(list[_WireEvent])


def decode_events(body: bytes | str) -> list[EventRecord]:
    """Decode one events page into records.

    Parameters
    ----------
    body
        Raw JSON body of a ``GET /repos/{owner}/{name}/events`` response.

    Returns
    -------
    list[EventRecord]
        One record per array element, in delivery order.

    Raises
    ------
    msgspec.DecodeError
        If the body is not valid JSON or an element lacks a string
        ``actor.login`` or an RFC 3339 ``created_at``. Unrecognised ``type``
        or ``action`` values never raise.

    """
    return [_record_from_wire(wire) for wire in _PAGE_DECODER.decode(body)]


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryEvents:
    """Every event fetched for one repository."""

    repo: str
    events: tuple[EventRecord, ...]
    pages_fetched: int = 0


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryFailure:
    """A repository whose event stream could not be fetched."""

    repo: str
    error: Exception

    @property
    def stage(self) -> FetchStage | None:
        """Return the failing fetch stage, or ``None`` for unexpected errors."""
        return getattr(self.error, "stage", None)


type RepositoryOutcome = RepositoryEvents | RepositoryFailure
