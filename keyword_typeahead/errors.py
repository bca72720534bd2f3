# errors.py - package exceptions

from __future__ import annotations

from typing import Optional


class TypeaheadError(Exception):
    """Base class for errors raised by keyword_typeahead."""


class TransportError(TypeaheadError):
    """The typeahead service answered with a non-success status."""

    def __init__(self, status_code: int, reason: Optional[str] = None) -> None:
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"typeahead lookup failed: HTTP {status_code} {self.reason}".rstrip())


class ChipStackFull(TypeaheadError):
    """A chip was pushed onto a stack that already holds its maximum."""
