"""Aggregation and text rendering of repository activity."""

from __future__ import annotations

from .aggregate import (
    count_closed,
    count_commented,
    count_opened,
    events_per_author,
)
from .text import render_failure, render_report

__all__ = [
    "count_closed",
    "count_commented",
    "count_opened",
    "events_per_author",
    "render_failure",
    "render_report",
]
