"""Print per-author pull request activity for GitHub repositories."""

from __future__ import annotations

import argparse
import os
import sys

from pullcount.config import ConfigError, GitHubEventsConfig, parse_repositories
from pullcount.github import RepositoryFailure, run_collection
from pullcount.logging import configure_logging, get_logger, log_info, log_warning
from pullcount.reporting import events_per_author, render_failure, render_report

logger = get_logger(__name__)

_EPILOG = """\
examples:
  pullcount python/peps
  pullcount python/peps,rust-lang/rust $GITHUB_TOKEN
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pullcount",
        description=__doc__,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "repositories",
        help="comma-separated list of GitHub repositories ('owner/name')",
    )
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="optional GitHub personal access token "
        "(defaults to $PULLCOUNT_GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="log level (defaults to $PULLCOUNT_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Fetch, aggregate and print activity for each requested repository.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 when every repository was reported, 1 when the
        configuration is invalid or any repository failed.

    """
    args = _build_parser().parse_args(argv)

    raw_level = args.log_level or os.environ.get("PULLCOUNT_LOG_LEVEL", "INFO")
    normalized_level, invalid_level = configure_logging(raw_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid log level %r, falling back to %s",
            raw_level,
            normalized_level,
        )

    try:
        repos = parse_repositories(args.repositories)
        config = GitHubEventsConfig.from_env(token=args.token)
    except ConfigError as exc:
        print(f"pullcount: {exc}", file=sys.stderr)
        return 1

    log_info(
        logger,
        "Computing stats for GitHub repos %r (with token: %s)",
        list(repos),
        config.has_token,
    )

    exit_code = 0
    for outcome in run_collection(repos, config):
        if isinstance(outcome, RepositoryFailure):
            print(render_failure(outcome), file=sys.stderr)
            exit_code = 1
            continue
        print(render_report(outcome.repo, events_per_author(outcome.events)))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
