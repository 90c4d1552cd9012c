"""Error types shared across the verification pipeline."""

from __future__ import annotations


class VerifyError(RuntimeError):
    """Base error for failures while verifying a package."""


class ArchiveOpenError(VerifyError):
    """Raised when an archive cannot be opened as a zip container."""


class EntryReadError(VerifyError):
    """Raised when a member of an otherwise valid archive cannot be read."""


class SchemaLoadError(VerifyError):
    """Raised when a descriptor schema cannot be loaded or compiled."""


class ConfigError(VerifyError):
    """Raised when the configuration file cannot be loaded or is invalid."""
