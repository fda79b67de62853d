"""Per-contributor pull request activity reports for GitHub repositories."""

from __future__ import annotations

__version__ = "0.1.0"
