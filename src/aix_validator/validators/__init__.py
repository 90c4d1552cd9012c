"""Checkers for the individual members of a package bundle."""

from .icon import ICON_SIZE, IconInspection, inspect
from .schema import SchemaKind, SchemaValidator, load_schema, validate

__all__ = [
    # Icon
    "ICON_SIZE",
    "IconInspection",
    "inspect",
    # Descriptor schemas
    "SchemaKind",
    "SchemaValidator",
    "load_schema",
    "validate",
]
