"""Validation outcome model."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of checking one entry against a schema or constraint set."""

    valid: bool
    violations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.valid and self.violations:
            raise ValueError("A valid outcome cannot carry violations")

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls) -> ValidationOutcome:
        return cls(valid=True)

    @classmethod
    def failed(cls, violations: Iterable[str] = ()) -> ValidationOutcome:
        return cls(valid=False, violations=tuple(violations))
