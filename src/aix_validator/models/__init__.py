"""Data models for package verification results."""

from __future__ import annotations

from .entry_role import EntryRole
from .outcome import ValidationOutcome
from .verdict import BatchResult, PackageVerdict

__all__ = [
    "BatchResult",
    "EntryRole",
    "PackageVerdict",
    "ValidationOutcome",
]
