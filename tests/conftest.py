"""Shared pytest fixtures for aix-validator tests."""

from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path
from collections.abc import Callable

import pytest
from PIL import Image

from aix_validator.validators.schema import SchemaValidator

# ============================================================================
# Documents
# ============================================================================

VALID_SOURCE = {
    "info": {
        "id": "en.example",
        "lang": "en",
        "name": "Example Source",
        "version": 3,
        "url": "https://example.com",
        "nsfw": 0,
        "minAppVersion": "0.6",
    },
    "languages": [{"code": "en", "default": True}],
    "listings": [{"name": "Latest"}, {"name": "Popular"}],
}

VALID_SETTINGS = [
    {
        "type": "group",
        "title": "Content",
        "items": [
            {"type": "switch", "key": "showNsfw", "title": "Show NSFW", "default": False},
            {
                "type": "select",
                "key": "quality",
                "title": "Image quality",
                "values": ["data", "data-saver"],
                "titles": ["Original", "Compressed"],
                "default": "data",
            },
        ],
    },
    {"type": "link", "title": "Website", "url": "https://example.com"},
]

VALID_FILTERS = [
    {"type": "title"},
    {"type": "author"},
    {"type": "sort", "name": "Sort", "options": ["Latest", "Title"], "canAscend": True},
    {"type": "genre", "name": "Action", "canExclude": True},
    {"type": "group", "name": "Status", "filters": [{"type": "check", "name": "Ongoing"}]},
]


@pytest.fixture
def valid_source() -> dict:
    return json.loads(json.dumps(VALID_SOURCE))


@pytest.fixture
def valid_settings() -> list:
    return json.loads(json.dumps(VALID_SETTINGS))


@pytest.fixture
def valid_filters() -> list:
    return json.loads(json.dumps(VALID_FILTERS))


# ============================================================================
# Images
# ============================================================================


def _png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_icon() -> Callable[..., bytes]:
    """Factory for PNG bytes; ``transparent_at`` punches one clear pixel."""

    def _make(
        width: int = 128,
        height: int = 128,
        mode: str = "RGB",
        transparent_at: tuple[int, int] | None = None,
    ) -> bytes:
        color = (200, 40, 40, 255) if mode == "RGBA" else (200, 40, 40)
        image = Image.new(mode, (width, height), color)
        if transparent_at is not None:
            if image.mode != "RGBA":
                image = image.convert("RGBA")
            image.putpixel(transparent_at, (0, 0, 0, 0))
        return _png(image)

    return _make


# ============================================================================
# Archives
# ============================================================================


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a zip with the given members, in the given order."""

    def _make(
        members: dict[str, bytes | str | dict | list],
        name: str = "example.aix",
        directory_marker: bool = True,
    ) -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            if directory_marker:
                zf.writestr("Payload/", b"")
            for member, content in members.items():
                if isinstance(content, (dict, list)):
                    content = json.dumps(content)
                zf.writestr(member, content)
        return path

    return _make


@pytest.fixture
def valid_members(make_icon, valid_source) -> dict[str, bytes | str | dict | list]:
    return {
        "Payload/main.wasm": b"\x00asm\x01\x00\x00\x00",
        "Payload/Icon.png": make_icon(),
        "Payload/source.json": valid_source,
    }


@pytest.fixture
def validator() -> SchemaValidator:
    return SchemaValidator.from_source(None)
