# Purpose: Define the failure types raised while reading patient archives.
# Date: 2026-10-19
# Related tests: tests/test_common.py

"""Exceptions raised by archive loading and plan queries."""

from __future__ import annotations


class ArchiveError(Exception):
    """Base class for patient archive failures."""


class ArchiveParseError(ArchiveError):
    """Raised when an archive cannot be read or is not well-formed XML."""


class PlanQueryError(ArchiveError):
    """Raised when an XPath lookup against an archive fails."""
