"""Concurrent event collection across repositories.

Each requested repository gets its own task walking its event pages. Tasks run
independently over one shared HTTP client: a failing repository is reported as
a :class:`~pullcount.github.models.RepositoryFailure` while the others run to
completion.

Usage
-----
>>> from pullcount.config import GitHubEventsConfig
>>> outcomes = run_collection(("python/peps",), GitHubEventsConfig())  # doctest: +SKIP

"""

from __future__ import annotations

import asyncio
import contextlib
import typing as typ

from pullcount.common.time import utcnow
from pullcount.config import ConfigError
from pullcount.logging import get_logger, log_debug

from .client import GitHubEventsClient
from .models import RepositoryEvents, RepositoryFailure
from .observability import FetchEventLogger, FetchRunContext
from .pagination import fetch_repository_events

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pullcount.config import GitHubEventsConfig

    from .client import PageFetcher
    from .models import RepositoryOutcome

logger = get_logger(__name__)


async def _fetch_with_logging(
    fetcher: PageFetcher,
    repo: str,
    *,
    max_pages: int,
    event_logger: FetchEventLogger,
) -> RepositoryEvents:
    """Fetch one repository, wrapping the run in start/complete/fail events."""
    log_debug(logger, "Query stats for GitHub repo %r", repo)
    context = FetchRunContext(repo_slug=repo, started_at=utcnow())
    event_logger.log_run_started(context)
    try:
        result = await fetch_repository_events(fetcher, repo, max_pages=max_pages)
    except Exception as exc:
        event_logger.log_run_failed(context, exc, utcnow() - context.started_at)
        raise
    event_logger.log_run_completed(context, result, utcnow() - context.started_at)
    return result


def _process_gathered_results(
    repos: cabc.Sequence[str],
    gathered: list[RepositoryEvents | BaseException],
) -> list[RepositoryOutcome]:
    """Pair each repository with its outcome.

    Parameters
    ----------
    repos
        Requested repositories, in request order.
    gathered
        Results from ``asyncio.gather`` with ``return_exceptions=True``.

    Returns
    -------
    list[RepositoryOutcome]
        One outcome per repository, in request order.

    Raises
    ------
    BaseException
        Re-raised immediately for system-level exceptions (e.g.,
        KeyboardInterrupt or cancellation).

    """
    outcomes: list[RepositoryOutcome] = []
    for repo, result in zip(repos, gathered, strict=True):
        if isinstance(result, Exception):
            outcomes.append(RepositoryFailure(repo=repo, error=result))
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes.append(result)
    return outcomes


async def collect_repository_events(
    repos: cabc.Sequence[str],
    config: GitHubEventsConfig,
    *,
    fetcher: PageFetcher | None = None,
    event_logger: FetchEventLogger | None = None,
) -> list[RepositoryOutcome]:
    """Fetch every repository's events concurrently.

    Parameters
    ----------
    repos
        Repository slugs in ``owner/name`` form.
    config
        Shared, read-only settings (credential, page cap, concurrency bound).
    fetcher
        Page source to use instead of a :class:`GitHubEventsClient` built from
        ``config``. The caller keeps ownership of an injected fetcher.
    event_logger
        Structured event sink; defaults to :class:`FetchEventLogger`.

    Returns
    -------
    list[RepositoryOutcome]
        Exactly one outcome per requested repository.

    Raises
    ------
    ConfigError
        If ``repos`` is empty; raised before any request is made.

    """
    if not repos:
        raise ConfigError.no_repositories()

    resolved_logger = event_logger or FetchEventLogger()
    client = GitHubEventsClient(config) if fetcher is None else None
    page_fetcher: PageFetcher = client or typ.cast("PageFetcher", fetcher)
    limiter: contextlib.AbstractAsyncContextManager[object] = (
        asyncio.Semaphore(config.max_concurrency)
        if config.max_concurrency is not None
        else contextlib.nullcontext()
    )

    async def run_one(repo: str) -> RepositoryEvents:
        async with limiter:
            return await _fetch_with_logging(
                page_fetcher,
                repo,
                max_pages=config.max_pages,
                event_logger=resolved_logger,
            )

    try:
        gathered = await asyncio.gather(
            *(run_one(repo) for repo in repos), return_exceptions=True
        )
    finally:
        if client is not None:
            await client.aclose()

    return _process_gathered_results(repos, gathered)


def run_collection(
    repos: cabc.Sequence[str],
    config: GitHubEventsConfig,
) -> list[RepositoryOutcome]:
    """Run :func:`collect_repository_events` on a fresh event loop."""
    return asyncio.run(collect_repository_events(repos, config))
