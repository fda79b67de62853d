"""Run the pullcount command line with ``python -m pullcount``."""

from __future__ import annotations

from pullcount.cli import main

raise SystemExit(main())
