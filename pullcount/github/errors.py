"""GitHub event fetch errors."""

from __future__ import annotations

import enum


class FetchStage(enum.StrEnum):
    """Step of a repository fetch that failed."""

    CONNECT = "connect"
    CONTENT = "content"
    DECODE = "decode"


class EventFetchError(RuntimeError):
    """Raised when a repository's event stream cannot be retrieved.

    Attributes
    ----------
    repo
        Repository slug whose fetch failed.
    stage
        The fetch stage at which the failure happened.

    """

    stage: FetchStage

    def __init__(self, message: str, *, repo: str) -> None:
        """Initialise with a message and the failing repository slug."""
        self.repo = repo
        super().__init__(message)


class GitHubConnectionError(EventFetchError):
    """Raised when the GitHub API cannot be reached."""

    stage = FetchStage.CONNECT

    @classmethod
    def unreachable(
        cls, repo: str, page: int, cause: BaseException
    ) -> GitHubConnectionError:
        """Return an error for transport failures while fetching a page."""
        return cls(
            f"Cannot connect to GitHub API for {repo} (page {page}): {cause}",
            repo=repo,
        )


class GitHubContentError(EventFetchError):
    """Raised when GitHub answers with an unexpected status."""

    stage = FetchStage.CONTENT

    def __init__(self, message: str, *, repo: str, status_code: int) -> None:
        """Initialise with a message, repository slug and HTTP status code."""
        self.status_code = status_code
        super().__init__(message, repo=repo)

    @classmethod
    def http_error(cls, repo: str, page: int, status_code: int) -> GitHubContentError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"Cannot get GitHub API content for {repo} (page {page}): "
            f"HTTP {status_code}",
            repo=repo,
            status_code=status_code,
        )


class GitHubDecodeError(EventFetchError):
    """Raised when an events page is not a JSON array of event objects."""

    stage = FetchStage.DECODE

    @classmethod
    def malformed_page(
        cls, repo: str, page: int, cause: BaseException
    ) -> GitHubDecodeError:
        """Return an error for a page that failed to decode."""
        return cls(
            f"Cannot deserialize GitHub API content for {repo} (page {page}): {cause}",
            repo=repo,
        )

