"""Package bundle access and entry classification."""

from __future__ import annotations

import logging
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from collections.abc import Iterator

from .errors import ArchiveOpenError, EntryReadError
from .models import EntryRole

logger = logging.getLogger(__name__)

PAYLOAD_DIR = "Payload/"

ROLES: dict[str, EntryRole] = {
    "Payload/main.wasm": EntryRole.PAYLOAD,
    "Payload/Icon.png": EntryRole.ICON,
    "Payload/source.json": EntryRole.SOURCE,
    "Payload/filters.json": EntryRole.FILTERS,
    "Payload/settings.json": EntryRole.SETTINGS,
}


def classify(name: str) -> EntryRole:
    """Map an archive member name to its role by exact match."""
    return ROLES.get(name, EntryRole.UNCLASSIFIED)


@dataclass(frozen=True)
class Entry:
    """One member of a package bundle; content is read on demand."""

    name: str
    role: EntryRole
    _archive: zipfile.ZipFile = field(repr=False, compare=False)
    _info: zipfile.ZipInfo = field(repr=False, compare=False)

    @property
    def display_name(self) -> str:
        return self.name.removeprefix(PAYLOAD_DIR)

    def read(self) -> bytes:
        try:
            return self._archive.read(self._info)
        except (
            zipfile.BadZipFile,
            zlib.error,
            EOFError,
            OSError,
            NotImplementedError,
            RuntimeError,
        ) as exc:
            raise EntryReadError(f"couldn't read {self.name}: {exc}") from exc


class Package:
    """An opened package bundle.

    Use as a context manager; the underlying zip handle is released on exit.
    """

    def __init__(self, path: Path | str, archive: zipfile.ZipFile) -> None:
        self.path = str(path)
        self._archive = archive

    def __enter__(self) -> Package:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._archive.close()

    def entries(self) -> Iterator[Entry]:
        """Yield members in stored order, skipping directory markers."""
        for info in self._archive.infolist():
            if info.is_dir():
                continue
            yield Entry(
                name=info.filename,
                role=classify(info.filename),
                _archive=self._archive,
                _info=info,
            )


def open_package(path: Path | str) -> Package:
    """Open ``path`` as a package bundle or raise ArchiveOpenError."""
    try:
        archive = zipfile.ZipFile(path)
    except (zipfile.BadZipFile, OSError) as exc:
        raise ArchiveOpenError(f"{path} is not a valid zip file") from exc

    logger.debug("opened %s (%d members)", path, len(archive.infolist()))
    return Package(path, archive)
