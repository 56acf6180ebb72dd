"""Marquee core - wire constants, field and pixel codecs."""
from .errors import (
    MarqueeError,
    InvalidSignature,
    UnexpectedEndOfInput,
    TrailingData,
    InvalidImage,
    InvalidBoxImage,
    InvalidScreenshotImage,
    InvalidAddress,
)
from .fields import pack_string, unpack_string, display_text
from .pixel import decode_pixel, encode_pixel
from .protocol import validate_signature

__all__ = [
    "MarqueeError",
    "InvalidSignature",
    "UnexpectedEndOfInput",
    "TrailingData",
    "InvalidImage",
    "InvalidBoxImage",
    "InvalidScreenshotImage",
    "InvalidAddress",
    "pack_string",
    "unpack_string",
    "display_text",
    "decode_pixel",
    "encode_pixel",
    "validate_signature",
]
