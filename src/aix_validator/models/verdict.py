"""Per-package verdict and batch aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Iterable

from .entry_role import EntryRole
from .outcome import ValidationOutcome

Finding = tuple[EntryRole, ValidationOutcome]


@dataclass(frozen=True)
class PackageVerdict:
    """Aggregate result for one package.

    Optional descriptors (settings, filters) keep validity and presence as
    separate flags: an absent descriptor is valid, a present one is valid
    only if it passed its schema.
    """

    payload_found: bool = False
    icon_present: bool = False
    icon_valid: bool = False
    source_present: bool = False
    source_valid: bool = False
    settings_present: bool = False
    settings_valid: bool = True
    filters_present: bool = False
    filters_valid: bool = True

    @property
    def passed(self) -> bool:
        return (
            self.payload_found
            and self.icon_valid
            and self.source_valid
            and self.settings_valid
            and self.filters_valid
        )

    @classmethod
    def from_findings(cls, findings: Iterable[Finding]) -> PackageVerdict:
        """Fold ``(role, outcome)`` findings into a verdict.

        Mandatory members pass if any occurrence passed; optional descriptors
        fail if any occurrence failed. Unclassified findings are ignored.
        """
        flags: dict[str, bool] = {}
        for role, outcome in findings:
            if role is EntryRole.PAYLOAD:
                flags["payload_found"] = True
            elif role is EntryRole.ICON:
                flags["icon_present"] = True
                flags["icon_valid"] = flags.get("icon_valid", False) or outcome.valid
            elif role is EntryRole.SOURCE:
                flags["source_present"] = True
                flags["source_valid"] = flags.get("source_valid", False) or outcome.valid
            elif role is EntryRole.SETTINGS:
                flags["settings_present"] = True
                flags["settings_valid"] = flags.get("settings_valid", True) and outcome.valid
            elif role is EntryRole.FILTERS:
                flags["filters_present"] = True
                flags["filters_valid"] = flags.get("filters_valid", True) and outcome.valid
        return cls(**flags)

    def missing_members(self) -> list[str]:
        """Return the file names of mandatory members absent from the package."""
        missing = []
        if not self.payload_found:
            missing.append("main.wasm")
        if not self.icon_present:
            missing.append("Icon.png")
        if not self.source_present:
            missing.append("source.json")
        return missing


@dataclass
class BatchResult:
    """Verdicts for every archive in a run, in processing order.

    A ``None`` verdict marks an archive that could not be opened.
    """

    results: list[tuple[str, PackageVerdict | None]] = field(default_factory=list)

    def record(self, path: str, verdict: PackageVerdict | None) -> None:
        self.results.append((path, verdict))

    def verdict_for(self, path: str) -> PackageVerdict | None:
        for recorded, verdict in self.results:
            if recorded == path:
                return verdict
        raise KeyError(path)

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def failed_paths(self) -> list[str]:
        return [path for path, verdict in self.results if verdict is None or not verdict.passed]

    @property
    def failed(self) -> bool:
        return bool(self.failed_paths)
