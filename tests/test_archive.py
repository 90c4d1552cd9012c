"""Tests for archive opening, enumeration and classification."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from aix_validator.archive import classify, open_package
from aix_validator.errors import ArchiveOpenError, EntryReadError
from aix_validator.models import EntryRole


@pytest.mark.parametrize(
    ("name", "role"),
    [
        ("Payload/main.wasm", EntryRole.PAYLOAD),
        ("Payload/Icon.png", EntryRole.ICON),
        ("Payload/source.json", EntryRole.SOURCE),
        ("Payload/filters.json", EntryRole.FILTERS),
        ("Payload/settings.json", EntryRole.SETTINGS),
        ("Payload/icon.png", EntryRole.UNCLASSIFIED),
        ("main.wasm", EntryRole.UNCLASSIFIED),
        ("Payload/nested/source.json", EntryRole.UNCLASSIFIED),
        ("Payload/", EntryRole.UNCLASSIFIED),
    ],
)
def test_classify_matches_exact_names(name: str, role: EntryRole) -> None:
    assert classify(name) is role


def test_entries_keep_stored_order_and_skip_directories(make_archive) -> None:
    path = make_archive(
        {
            "Payload/source.json": "{}",
            "Payload/extra/readme.txt": "hi",
            "Payload/main.wasm": b"\x00asm",
        }
    )

    with open_package(path) as package:
        entries = list(package.entries())

    assert [e.name for e in entries] == [
        "Payload/source.json",
        "Payload/extra/readme.txt",
        "Payload/main.wasm",
    ]
    assert [e.role for e in entries] == [
        EntryRole.SOURCE,
        EntryRole.UNCLASSIFIED,
        EntryRole.PAYLOAD,
    ]
    assert entries[0].display_name == "source.json"


def test_entry_read_returns_content(make_archive) -> None:
    path = make_archive({"Payload/source.json": '{"info": {}}'})

    with open_package(path) as package:
        (entry,) = list(package.entries())
        assert entry.read() == b'{"info": {}}'


def test_package_handle_is_closed_on_exit(make_archive) -> None:
    path = make_archive({"Payload/main.wasm": b"\x00asm"})

    with open_package(path) as package:
        archive = package._archive
    assert archive.fp is None


def test_package_handle_is_closed_when_body_raises(make_archive) -> None:
    path = make_archive({"Payload/main.wasm": b"\x00asm"})

    with pytest.raises(KeyError):
        with open_package(path) as package:
            archive = package._archive
            raise KeyError("boom")
    assert archive.fp is None


def test_open_rejects_non_zip(tmp_path: Path) -> None:
    path = tmp_path / "not-a-zip.aix"
    path.write_bytes(b"definitely not a zip file")

    with pytest.raises(ArchiveOpenError, match="is not a valid zip file"):
        open_package(path)


def test_open_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ArchiveOpenError):
        open_package(tmp_path / "missing.aix")


def test_corrupt_member_raises_read_error(tmp_path: Path) -> None:
    path = tmp_path / "corrupt.aix"
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_STORED) as zf:
        zf.writestr("Payload/source.json", b"AAAAAAAAAAAAAAAA")
    path.write_bytes(path.read_bytes().replace(b"AAAAAAAAAAAAAAAA", b"BBBBBBBBBBBBBBBB"))

    with open_package(path) as package:
        (entry,) = list(package.entries())
        with pytest.raises(EntryReadError, match="couldn't read Payload/source.json"):
            entry.read()
