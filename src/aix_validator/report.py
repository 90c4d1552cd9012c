"""Human-readable console reporting for package verification.

Reporters observe the verifier; they never influence a verdict. The base
``Reporter`` ignores every event, ``ConsoleReporter`` renders the
line-oriented report.
"""

from __future__ import annotations

import sys
from typing import TextIO

from .archive import Entry
from .models import BatchResult, PackageVerdict, ValidationOutcome
from .validators.icon import IconInspection


class Reporter:
    """No-op observer of verification events."""

    def package_started(self, path: str) -> None:
        pass

    def open_failed(self, path: str, error: Exception) -> None:
        pass

    def entry_started(self, entry: Entry) -> None:
        pass

    def read_failed(self, entry: Entry, error: Exception) -> None:
        pass

    def icon_checked(self, entry: Entry, inspection: IconInspection) -> None:
        pass

    def document_checked(self, entry: Entry, outcome: ValidationOutcome) -> None:
        pass

    def package_finished(self, path: str, verdict: PackageVerdict) -> None:
        pass

    def batch_finished(self, result: BatchResult) -> None:
        pass


def _status(ok: bool) -> str:
    return "ok" if ok else "error"


class ConsoleReporter(Reporter):
    """Writes the verification report to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _write(self, line: str = "") -> None:
        print(line, file=self._stream or sys.stdout)

    def package_started(self, path: str) -> None:
        self._write(f"* Testing {path}")

    def open_failed(self, path: str, error: Exception) -> None:
        self._write(f"error: {error}")

    def entry_started(self, entry: Entry) -> None:
        self._write(f"  * {entry.display_name}")

    def read_failed(self, entry: Entry, error: Exception) -> None:
        self._write(f"    * error: {error}")

    def icon_checked(self, entry: Entry, inspection: IconInspection) -> None:
        if inspection.decode_error is not None:
            self._write(f"    * error: could not decode image file: {inspection.decode_error}")
            return

        size = inspection.required_size
        line = f"    * Testing if image's dimensions are {size}x{size}... "
        if inspection.dimensions_ok:
            self._write(line + "ok")
        else:
            found = f"{inspection.width}x{inspection.height}"
            self._write(line + f"error: expected {size}x{size}, found {found}")

        line = "    * Testing if image is fully opaque... "
        if inspection.opaque_ok:
            self._write(line + "ok")
        else:
            x, y = inspection.transparent_pixel or (0, 0)
            self._write(line + f"error: pixel at ({x}, {y}) is not opaque")

    def document_checked(self, entry: Entry, outcome: ValidationOutcome) -> None:
        self._write(
            f"    * Testing if {entry.display_name} is valid against schema... "
            f"{_status(outcome.valid)}"
        )
        for violation in outcome.violations:
            self._write(f"      * {violation}")

    def package_finished(self, path: str, verdict: PackageVerdict) -> None:
        if not verdict.passed:
            for name in verdict.missing_members():
                self._write(f"  * test failed: did not find {name}")
        self._write()

    def batch_finished(self, result: BatchResult) -> None:
        failed = len(result.failed_paths)
        self._write(f"Checked {result.attempted} package(s): {failed} failed")
