"""Marquee document model and raster preparation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from PIL import Image

from mrq_core.errors import InvalidImage
from mrq_core.protocol import BOX_HEIGHT, BOX_WIDTH, SCREENSHOT_HEIGHT, SCREENSHOT_WIDTH

logger = logging.getLogger(__name__)

NATIVE_MODE = "RGBA"
HIGH_PRECISION_MODES = ("I", "F")
BOX_SIZE = (BOX_WIDTH, BOX_HEIGHT)
SCREENSHOT_SIZE = (SCREENSHOT_WIDTH, SCREENSHOT_HEIGHT)


def blank_raster(size: tuple[int, int]) -> Image.Image:
    return Image.new(NATIVE_MODE, size)


@dataclass
class MarqueeDocument:
    """A .mrq file: text metadata, optional load/exec addresses, two images.

    Fields are mutated directly by the owner. Addresses only count as a
    pair; a document with both at zero has no custom load addresses.
    `reserved_flags` holds flag bits this codec does not interpret, such as
    the EEPROM size bits written by older tools, so they survive a rewrite.
    """

    title: str = ""
    developer: str = ""
    publisher: str = ""
    year: str = ""
    load_addr: int = 0
    exec_addr: int = 0
    reserved_flags: int = 0
    box: Image.Image = field(default_factory=lambda: blank_raster(BOX_SIZE))
    screenshot: Image.Image = field(default_factory=lambda: blank_raster(SCREENSHOT_SIZE))

    @property
    def custom_load(self) -> bool:
        return bool(self.load_addr or self.exec_addr)

    def info(self) -> dict:
        """Metadata summary, without the images."""
        out = {
            "title": self.title,
            "developer": self.developer,
            "publisher": self.publisher,
            "year": self.year,
        }
        if self.custom_load:
            out["load_addr"] = f"0x{self.load_addr:08x}"
            out["exec_addr"] = f"0x{self.exec_addr:08x}"
        return out


def _to_8bit(image: Image.Image) -> Image.Image:
    """Keep the high byte of 16-bit samples, as a gray 8-bit image."""
    if image.mode != "F":
        # I;16 variants widen to I without loss.
        image = image.convert("I")
    return image.point(lambda v: v * (1 / 256)).convert("L")


def prepare_raster(
    image: Image.Image,
    size: tuple[int, int],
    error_cls: type[InvalidImage],
) -> Image.Image:
    """Check dimensions and return the image in native RGBA form.

    High-precision samples are scaled down to 8 bits, not clipped.
    Transparent pixels are composited onto opaque black, since alpha is
    not stored. Every step returns a new image; the caller's image is
    never modified.
    """
    if tuple(image.size) != tuple(size):
        raise error_cls(image.size, size)
    if image.mode.startswith("I;16") or image.mode in HIGH_PRECISION_MODES:
        logger.debug("Scaling %s raster to 8 bits", image.mode)
        image = _to_8bit(image)
    if image.mode != NATIVE_MODE:
        logger.debug("Converting %s raster to %s", image.mode, NATIVE_MODE)
        image = image.convert(NATIVE_MODE)
    if image.getextrema()[3][0] < 255:
        logger.debug("Compositing translucent raster onto black")
        image = Image.alpha_composite(Image.new(NATIVE_MODE, image.size, (0, 0, 0, 255)), image)
    return image
