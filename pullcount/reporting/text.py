"""Plain-text renderer for per-author pull request activity.

Usage
-----
>>> from pullcount.reporting.text import render_report
>>> print(render_report("octo/reef", {}), end="")
pull requests for "octo/reef" ->
  opened per author:
  commented per author:
  closed per author:

"""

from __future__ import annotations

import typing as typ

from .aggregate import count_closed, count_commented, count_opened

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pullcount.github.models import EventRecord, RepositoryFailure

    from .aggregate import EventsPerAuthor

_SECTIONS: tuple[tuple[str, cabc.Callable[[list[EventRecord]], int]], ...] = (
    ("opened per author", count_opened),
    ("commented per author", count_commented),
    ("closed per author", count_closed),
)


def _render_section(
    lines: list[str],
    heading: str,
    events_per_author: EventsPerAuthor,
    counter: cabc.Callable[[list[EventRecord]], int],
) -> None:
    """Append a section heading and one line per author with a non-zero count."""
    lines.append(f"  {heading}:")
    for author, events in events_per_author.items():
        count = counter(events)
        if count > 0:
            lines.append(f"    {author}: {count}")


def render_report(repo: str, events_per_author: EventsPerAuthor) -> str:
    """Render opened, commented and closed counts for one repository.

    Parameters
    ----------
    repo
        Repository slug shown in the heading.
    events_per_author
        Output of :func:`~pullcount.reporting.aggregate.events_per_author`.

    Returns
    -------
    str
        Newline-terminated report text.

    """
    lines = [f'pull requests for "{repo}" ->']
    for heading, counter in _SECTIONS:
        _render_section(lines, heading, events_per_author, counter)
    return "\n".join(lines) + "\n"


def render_failure(failure: RepositoryFailure) -> str:
    """Render a one-line message naming the repository and failing stage."""
    stage = failure.stage or "unknown"
    return (
        f'failed to fetch events for "{failure.repo}" (stage: {stage}): '
        f"{failure.error}"
    )
