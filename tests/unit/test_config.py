"""Unit tests for environment-driven configuration."""

from __future__ import annotations

import secrets
import typing as typ

import pytest

from pullcount.config import (
    MAX_PAGES,
    ConfigError,
    GitHubEventsConfig,
    parse_repositories,
)

_TOKEN = secrets.token_hex(8)


class TestGitHubEventsConfig:
    """Tests for GitHubEventsConfig."""

    def test_defaults(self) -> None:
        """An empty environment yields anonymous defaults."""
        config = GitHubEventsConfig.from_env()

        assert config == GitHubEventsConfig()
        assert config.token is None
        assert not config.has_token
        assert config.api_url == "https://api.github.com"
        assert config.timeout_s == 20.0
        assert config.max_pages == MAX_PAGES == 10
        assert config.max_concurrency is None

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Every PULLCOUNT_* setting is honoured."""
        monkeypatch.setenv("PULLCOUNT_GITHUB_TOKEN", _TOKEN)
        monkeypatch.setenv("PULLCOUNT_GITHUB_API_URL", "https://ghe.example.test/api/v3/")
        monkeypatch.setenv("PULLCOUNT_HTTP_TIMEOUT_S", "2.5")
        monkeypatch.setenv("PULLCOUNT_MAX_PAGES", "3")

        config = GitHubEventsConfig.from_env()

        assert config.token == _TOKEN
        assert config.has_token
        assert config.api_url == "https://ghe.example.test/api/v3"
        assert config.timeout_s == 2.5
        assert config.max_pages == 3

    def test_explicit_token_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A token passed in overrides the environment."""
        monkeypatch.setenv("PULLCOUNT_GITHUB_TOKEN", "from-env")

        assert GitHubEventsConfig.from_env(token=_TOKEN).token == _TOKEN

    @pytest.mark.parametrize("token", ["", "   "])
    def test_blank_token_means_anonymous(self, token: str) -> None:
        """Blank tokens are treated as absent."""
        config = GitHubEventsConfig(token=token)

        assert config.token is None
        assert not config.has_token

    @pytest.mark.parametrize(
        ("name", "raw"),
        [
            ("PULLCOUNT_HTTP_TIMEOUT_S", "soon"),
            ("PULLCOUNT_HTTP_TIMEOUT_S", "0"),
            ("PULLCOUNT_MAX_PAGES", "many"),
            ("PULLCOUNT_MAX_PAGES", "2.5"),
            ("PULLCOUNT_MAX_PAGES", "-1"),
        ],
    )
    def test_invalid_numbers_are_rejected(
        self, monkeypatch: pytest.MonkeyPatch, name: str, raw: str
    ) -> None:
        """Non-numeric or non-positive numeric settings raise ConfigError."""
        monkeypatch.setenv(name, raw)

        with pytest.raises(ConfigError, match=name):
            GitHubEventsConfig.from_env()

    def test_reads_max_concurrency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """PULLCOUNT_MAX_CONCURRENCY bounds in-flight repositories."""
        monkeypatch.setenv("PULLCOUNT_MAX_CONCURRENCY", "4")

        assert GitHubEventsConfig.from_env().max_concurrency == 4

    @pytest.mark.parametrize("raw", ["0", "-2", "few"])
    def test_invalid_max_concurrency_from_env(
        self, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        """A non-positive or non-numeric bound is rejected."""
        monkeypatch.setenv("PULLCOUNT_MAX_CONCURRENCY", raw)

        with pytest.raises(ConfigError, match="PULLCOUNT_MAX_CONCURRENCY"):
            GitHubEventsConfig.from_env()

    @pytest.mark.parametrize(
        ("kwargs", "name"),
        [
            ({"max_pages": 0}, "max_pages"),
            ({"max_pages": -1}, "max_pages"),
            ({"max_concurrency": 0}, "max_concurrency"),
            ({"max_concurrency": -3}, "max_concurrency"),
            ({"timeout_s": 0.0}, "timeout_s"),
        ],
        ids=[
            "zero-pages",
            "negative-pages",
            "zero-concurrency",
            "negative-concurrency",
            "zero-timeout",
        ],
    )
    def test_direct_construction_rejects_unusable_limits(
        self, kwargs: dict[str, typ.Any], name: str
    ) -> None:
        """Limits that would stall or silently skip collection are refused."""
        with pytest.raises(ConfigError, match=f"{name} must be a positive number"):
            GitHubEventsConfig(**kwargs)

    def test_smallest_limits_are_accepted(self) -> None:
        """One page and one worker are valid settings."""
        config = GitHubEventsConfig(max_pages=1, max_concurrency=1)

        assert (config.max_pages, config.max_concurrency) == (1, 1)

    @pytest.mark.parametrize(
        "api_url",
        ["https://ghe.example.test/api/v3/", "https://ghe.example.test/api/v3//"],
    )
    def test_api_url_trailing_slash_is_stripped(self, api_url: str) -> None:
        """The API root is normalised however the config is built."""
        config = GitHubEventsConfig(api_url=api_url)

        assert config.api_url == "https://ghe.example.test/api/v3"

    def test_blank_numbers_use_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Empty numeric settings fall back to defaults."""
        monkeypatch.setenv("PULLCOUNT_HTTP_TIMEOUT_S", " ")
        monkeypatch.setenv("PULLCOUNT_MAX_PAGES", "")

        config = GitHubEventsConfig.from_env()

        assert config.timeout_s == 20.0
        assert config.max_pages == MAX_PAGES


class TestParseRepositories:
    """Tests for parse_repositories."""

    def test_valid_list(self) -> None:
        """Valid slugs are returned in order."""
        assert parse_repositories("python/peps, rust-lang/rust") == (
            "python/peps",
            "rust-lang/rust",
        )

    @pytest.mark.parametrize("raw", ["", ",", "  ,  "])
    def test_empty_list(self, raw: str) -> None:
        """An empty list is a configuration error."""
        with pytest.raises(ConfigError, match="At least one repository"):
            parse_repositories(raw)

    @pytest.mark.parametrize("raw", ["python", "python/peps,rust", "a/b/c"])
    def test_invalid_slug(self, raw: str) -> None:
        """A malformed entry is named in the error."""
        with pytest.raises(ConfigError, match="Invalid repository") as excinfo:
            parse_repositories(raw)

        assert isinstance(excinfo.value.__cause__, ValueError)
