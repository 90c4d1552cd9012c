"""Core verification entrypoints.

``verify_packages`` runs a batch of archives; ``verify_package`` checks one
opened archive. Neither prints anything directly: console output is produced
by the Reporter passed in, and verdicts are computed from the collected
findings alone.
"""

from __future__ import annotations

import logging
from pathlib import Path
from collections.abc import Iterable

from .archive import Entry, Package, open_package
from .config import Settings
from .errors import ArchiveOpenError, EntryReadError
from .models import BatchResult, EntryRole, PackageVerdict, ValidationOutcome
from .models.verdict import Finding
from .report import Reporter
from .validators.icon import inspect as inspect_icon
from .validators.schema import SchemaKind, SchemaValidator

logger = logging.getLogger(__name__)

_SCHEMA_KINDS: dict[EntryRole, SchemaKind] = {
    EntryRole.SOURCE: SchemaKind.SOURCE,
    EntryRole.FILTERS: SchemaKind.FILTERS,
    EntryRole.SETTINGS: SchemaKind.SETTINGS,
}


def check_entry(
    entry: Entry,
    validator: SchemaValidator,
    settings: Settings,
    reporter: Reporter,
) -> ValidationOutcome | None:
    """Run the check matching the entry's role; None for unclassified entries."""
    if entry.role is EntryRole.UNCLASSIFIED:
        return None

    if entry.role is EntryRole.PAYLOAD:
        # presence is all that is checked for the payload
        return ValidationOutcome.ok()

    try:
        data = entry.read()
    except EntryReadError as exc:
        reporter.read_failed(entry, exc)
        return ValidationOutcome.failed([str(exc)])

    if entry.role is EntryRole.ICON:
        inspection = inspect_icon(
            data,
            size=settings.icon_size,
            strict=settings.strict_icon_dimensions,
        )
        reporter.icon_checked(entry, inspection)
        return inspection.to_outcome()

    outcome = validator.validate(_SCHEMA_KINDS[entry.role], data)
    reporter.document_checked(entry, outcome)
    return outcome


def verify_package(
    package: Package,
    validator: SchemaValidator,
    settings: Settings | None = None,
    reporter: Reporter | None = None,
) -> PackageVerdict:
    """Check every member of an opened package and return its verdict."""
    settings = settings or Settings()
    reporter = reporter or Reporter()

    reporter.package_started(package.path)
    findings: list[Finding] = []
    for entry in package.entries():
        reporter.entry_started(entry)
        outcome = check_entry(entry, validator, settings, reporter)
        if outcome is not None:
            findings.append((entry.role, outcome))

    verdict = PackageVerdict.from_findings(findings)
    logger.debug("%s: %d findings, passed=%s", package.path, len(findings), verdict.passed)
    reporter.package_finished(package.path, verdict)
    return verdict


def verify_packages(
    paths: Iterable[Path | str],
    settings: Settings | None = None,
    reporter: Reporter | None = None,
    validator: SchemaValidator | None = None,
) -> BatchResult:
    """Verify each archive in turn.

    Params:
        paths: archive paths; each is attempted exactly once, in order
        settings: icon and schema settings (defaults when None)
        reporter: observer for progress output (silent when None)
        validator: prebuilt schema validator; built from
            ``settings.schema_source`` when None

    Returns: BatchResult holding one verdict per path (None when the archive
    could not be opened). A failing archive never stops the batch.

    Raises: SchemaLoadError if the schemas cannot be loaded.
    """
    settings = settings or Settings()
    reporter = reporter or Reporter()
    if validator is None:
        validator = SchemaValidator.from_source(settings.schema_source)

    result = BatchResult()
    for raw_path in paths:
        path = str(raw_path)
        try:
            package = open_package(path)
        except ArchiveOpenError as exc:
            logger.debug("skipping %s: %s", path, exc.__cause__)
            reporter.open_failed(path, exc)
            result.record(path, None)
            continue

        with package:
            verdict = verify_package(package, validator, settings, reporter)
        result.record(path, verdict)

    reporter.batch_finished(result)
    return result
