"""16-bit packed pixel codec.

Word layout, most significant bit first: RRRRRBBBBBGGGGGG.
Red and blue keep their top 5 bits, green its top 6. Alpha is not stored.
Quantization truncates; decoded channels have their low bits zero and
decoded alpha is always opaque.
"""
from __future__ import annotations

import struct

from .protocol import PIXEL_FMT, PIXEL_LEN

RED_MASK = 0xF8
GREEN_MASK = 0xFC
BLUE_MASK = 0xF8
OPAQUE = 255


def decode_pixel(word: int) -> tuple[int, int, int, int]:
    r = (word >> 8) & 0xF8
    g = (word & 0x3F) << 2
    b = (word >> 3) & 0xF8
    return r, g, b, OPAQUE


def encode_pixel(r: int, g: int, b: int, a: int = OPAQUE) -> int:
    # Alpha is discarded.
    return ((r & RED_MASK) << 8) | ((g & GREEN_MASK) >> 2) | ((b & BLUE_MASK) << 3)


def encode_pixels(rgba: bytes) -> bytes:
    """Pack a row-major run of RGBA bytes into big-endian pixel words."""
    words = [encode_pixel(*rgba[i : i + 4]) for i in range(0, len(rgba), 4)]
    return struct.pack(f">{len(words)}H", *words)


def decode_pixels(data: bytes) -> bytes:
    """Unpack big-endian pixel words into a row-major run of RGBA bytes."""
    if len(data) % PIXEL_LEN:
        raise ValueError(f"Pixel data length {len(data)} is not a multiple of {PIXEL_LEN}")
    out = bytearray()
    for (word,) in struct.iter_unpack(PIXEL_FMT, data):
        out.extend(decode_pixel(word))
    return bytes(out)
