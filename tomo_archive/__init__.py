# Purpose: Expose patient archive query entry points for convenient imports.
# Date: 2026-10-19
# Related tests: tests/test_plans.py

"""TomoTherapy patient archive package exports."""

from __future__ import annotations

from .common import load_archive, parse_archive_bytes
from .errors import ArchiveError, ArchiveParseError, PlanQueryError
from .plans import filter_approved_plans, is_approved_plan, parse_brief_plans

__all__ = [
    "load_archive",
    "parse_archive_bytes",
    "filter_approved_plans",
    "is_approved_plan",
    "parse_brief_plans",
    "ArchiveError",
    "ArchiveParseError",
    "PlanQueryError",
]
