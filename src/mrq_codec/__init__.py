"""Marquee codec - encode and decode .mrq documents."""
from .document import MarqueeDocument, BOX_SIZE, SCREENSHOT_SIZE
from .codec import DecodeState, MarqueeDecoder, decode, encode, read_marquee, write_marquee

__all__ = [
    "MarqueeDocument",
    "BOX_SIZE",
    "SCREENSHOT_SIZE",
    "DecodeState",
    "MarqueeDecoder",
    "decode",
    "encode",
    "read_marquee",
    "write_marquee",
]
