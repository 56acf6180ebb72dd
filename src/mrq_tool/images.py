"""Load box and screenshot art from image files."""
from __future__ import annotations

from pathlib import Path

from PIL import Image


def load_image(path: Path) -> Image.Image:
    """Open any image Pillow understands (PNG, JPEG, GIF, ...).

    Only the first frame of animated images is used. The image keeps its
    source mode; the codec converts it to RGBA when encoding.
    """
    with Image.open(path) as im:
        im.load()
        return im.copy()
