"""Icon checks: decodability, canvas size and full opacity."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

import png
from PIL import Image

from ..models import ValidationOutcome

logger = logging.getLogger(__name__)

ICON_SIZE = 128
ICON_FORMATS = ("PNG",)

_ALPHA_MODES = {"RGBA", "RGBa", "LA", "La", "PA"}
_OPAQUE = 255
_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@dataclass(frozen=True)
class IconInspection:
    """Result of inspecting one icon image."""

    required_size: int = ICON_SIZE
    decode_error: str | None = None
    format: str | None = None
    width: int = 0
    height: int = 0
    dimensions_ok: bool = False
    opaque_ok: bool = False
    transparent_pixel: tuple[int, int] | None = None

    @property
    def valid(self) -> bool:
        return self.decode_error is None and self.dimensions_ok and self.opaque_ok

    def to_outcome(self) -> ValidationOutcome:
        if self.valid:
            return ValidationOutcome.ok()

        violations: list[str] = []
        if self.decode_error is not None:
            violations.append(f"could not decode image: {self.decode_error}")
        else:
            if not self.dimensions_ok:
                size = self.required_size
                violations.append(f"expected {size}x{size}, found {self.width}x{self.height}")
            if not self.opaque_ok:
                x, y = self.transparent_pixel or (0, 0)
                violations.append(f"image is not fully opaque (first transparent pixel at {x},{y})")
        return ValidationOutcome.failed(violations)


def dimensions_ok(width: int, height: int, size: int = ICON_SIZE, strict: bool = False) -> bool:
    """Check the canvas size.

    Without ``strict`` the check only fails when both sides differ from
    ``size``; a single matching side is accepted.
    """
    if strict:
        return width == size and height == size
    return width == size or height == size


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in _ALPHA_MODES or "transparency" in image.info


def first_transparent_pixel(image: Image.Image) -> tuple[int, int] | None:
    """Return the (x, y) of the first non-opaque pixel in raster order, if any."""
    if not _has_alpha(image):
        return None

    alpha = image.convert("RGBA").getchannel("A")
    low, _ = alpha.getextrema()
    if low == _OPAQUE:
        return None

    width = alpha.width
    for index, value in enumerate(alpha.tobytes()):
        if value != _OPAQUE:
            return index % width, index // width
    return None


def _png_bit_depth(data: bytes) -> int | None:
    # IHDR is always the first chunk; its bit depth byte follows width and height
    if len(data) < 26 or not data.startswith(_PNG_SIGNATURE) or data[12:16] != b"IHDR":
        return None
    return data[24]


def first_transparent_pixel_16bit(data: bytes) -> tuple[int, int] | None:
    """Like first_transparent_pixel, for 16-bit PNGs read at full sample precision.

    Pillow reduces 16-bit alpha to 8 bits, which hides alpha values just below
    the maximum.
    """
    _, _, rows, info = png.Reader(bytes=data).asDirect()
    if not info["alpha"]:
        return None

    planes = info["planes"]
    opaque = 2 ** info["bitdepth"] - 1
    for y, row in enumerate(rows):
        for x, value in enumerate(row[planes - 1 :: planes]):
            if value != opaque:
                return x, y
    return None


def inspect(data: bytes, size: int = ICON_SIZE, strict: bool = False) -> IconInspection:
    """Decode ``data`` as a PNG icon and check its size and opacity."""
    try:
        image = Image.open(io.BytesIO(data), formats=ICON_FORMATS)
        image.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        logger.debug("icon decode failed: %s", exc)
        return IconInspection(required_size=size, decode_error=str(exc) or type(exc).__name__)

    with image:
        width, height = image.size
        if _png_bit_depth(data) == 16:
            try:
                transparent = first_transparent_pixel_16bit(data)
            except png.Error as exc:
                logger.debug("16-bit icon decode failed: %s", exc)
                return IconInspection(required_size=size, decode_error=str(exc))
        else:
            transparent = first_transparent_pixel(image)
        return IconInspection(
            required_size=size,
            format=image.format,
            width=width,
            height=height,
            dimensions_ok=dimensions_ok(width, height, size, strict),
            opaque_ok=transparent is None,
            transparent_pixel=transparent,
        )
