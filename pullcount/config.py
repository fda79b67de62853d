"""Configuration for GitHub event collection.

Settings come from explicit arguments first and the environment second:

- ``PULLCOUNT_GITHUB_TOKEN``: personal access token (optional)
- ``PULLCOUNT_GITHUB_API_URL``: REST API root (default ``https://api.github.com``)
- ``PULLCOUNT_HTTP_TIMEOUT_S``: per-request timeout in seconds (default ``20``)
- ``PULLCOUNT_MAX_PAGES``: page cap per repository (default ``10``)
- ``PULLCOUNT_MAX_CONCURRENCY``: repositories fetched at once (default: all)
- ``PULLCOUNT_LOG_LEVEL``: log level for the command line (default ``INFO``)
"""

from __future__ import annotations

import dataclasses
import os

from pullcount.common.slug import parse_repo_slug, split_repo_slugs

# The repository events API serves at most ten pages of thirty events.
MAX_PAGES = 10

_DEFAULT_API_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 20.0
_DEFAULT_USER_AGENT = "pullcount/0.1"


class ConfigError(RuntimeError):
    """Raised when command-line or environment configuration is invalid."""

    @classmethod
    def no_repositories(cls) -> ConfigError:
        """Return an error when no repository was supplied."""
        return cls("At least one repository ('owner/name') is required")

    @classmethod
    def invalid_repository(cls, slug: str) -> ConfigError:
        """Return an error for a malformed repository slug."""
        return cls(f"Invalid repository {slug!r}: expected 'owner/name'")

    @classmethod
    def invalid_number(cls, name: str, raw: str) -> ConfigError:
        """Return an error for a non-numeric or out-of-range setting."""
        return cls(f"{name} must be a positive number, got {raw!r}")


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubEventsConfig:
    """Read-only settings shared by every repository worker.

    Attributes
    ----------
    token
        Personal access token sent as a bearer credential, or ``None`` for
        anonymous requests.
    api_url
        Root of the GitHub REST API.
    timeout_s
        Upper bound on each page request.
    user_agent
        ``User-Agent`` header value; GitHub rejects requests without one.
    max_pages
        Hard cap on pages fetched per repository.
    max_concurrency
        Maximum repositories fetched at once; ``None`` fetches all at once.

    """

    token: str | None = None
    api_url: str = _DEFAULT_API_URL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = _DEFAULT_USER_AGENT
    max_pages: int = MAX_PAGES
    max_concurrency: int | None = None

    def __post_init__(self) -> None:
        """Normalise the token and API root, and reject unusable limits.

        Raises
        ------
        ConfigError
            If ``timeout_s``, ``max_pages`` or ``max_concurrency`` is not
            positive.

        """
        if self.token is not None and not self.token.strip():
            object.__setattr__(self, "token", None)
        object.__setattr__(self, "api_url", self.api_url.rstrip("/"))
        if self.timeout_s <= 0:
            raise ConfigError.invalid_number("timeout_s", str(self.timeout_s))
        if self.max_pages < 1:
            raise ConfigError.invalid_number("max_pages", str(self.max_pages))
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ConfigError.invalid_number(
                "max_concurrency", str(self.max_concurrency)
            )

    @property
    def has_token(self) -> bool:
        """Return whether requests are authenticated."""
        return self.token is not None

    @classmethod
    def from_env(cls, token: str | None = None) -> GitHubEventsConfig:
        """Build configuration from ``PULLCOUNT_*`` environment variables.

        Parameters
        ----------
        token
            Explicit token; takes precedence over ``PULLCOUNT_GITHUB_TOKEN``.

        Raises
        ------
        ConfigError
            If a numeric setting is not a positive number.

        """
        resolved_token = token or os.environ.get("PULLCOUNT_GITHUB_TOKEN")
        api_url = os.environ.get("PULLCOUNT_GITHUB_API_URL", "").strip()
        return cls(
            token=resolved_token,
            api_url=api_url or _DEFAULT_API_URL,
            timeout_s=_positive_float_from_env(
                "PULLCOUNT_HTTP_TIMEOUT_S", _DEFAULT_TIMEOUT_S
            ),
            max_pages=_positive_int_from_env("PULLCOUNT_MAX_PAGES", MAX_PAGES),
            max_concurrency=_optional_positive_int_from_env(
                "PULLCOUNT_MAX_CONCURRENCY"
            ),
        )


def _positive_float_from_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError.invalid_number(name, raw) from exc
    if value <= 0:
        raise ConfigError.invalid_number(name, raw)
    return value


def _positive_int_from_env(name: str, default: int) -> int:
    value = _optional_positive_int_from_env(name)
    return default if value is None else value


def _optional_positive_int_from_env(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError.invalid_number(name, raw) from exc
    if value <= 0:
        raise ConfigError.invalid_number(name, raw)
    return value


def parse_repositories(raw: str) -> tuple[str, ...]:
    """Split and validate a comma-separated ``owner/name`` list.

    Raises
    ------
    ConfigError
        If the list is empty or an entry is not an ``owner/name`` slug.

    """
    slugs = split_repo_slugs(raw)
    if not slugs:
        raise ConfigError.no_repositories()
    for slug in slugs:
        try:
            parse_repo_slug(slug)
        except ValueError as exc:
            raise ConfigError.invalid_repository(slug) from exc
    return slugs
