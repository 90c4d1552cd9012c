"""Logical roles of the members stored in a package bundle."""

from __future__ import annotations

from enum import Enum


class EntryRole(str, Enum):
    """Role of an archive member, decided by its exact path."""

    PAYLOAD = "payload"
    ICON = "icon"
    SOURCE = "descriptor:source"
    FILTERS = "descriptor:filters"
    SETTINGS = "descriptor:settings"
    UNCLASSIFIED = "unclassified"
