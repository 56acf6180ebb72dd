"""Fixed-width field packing for the marquee record."""
from __future__ import annotations

import logging

from .protocol import FLAG_CUSTOM_LOAD, RESERVED_FLAGS_MASK

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
# Keeps arbitrary bytes intact across decode/encode.
ERRORS_MODE = "surrogateescape"


def pack_string(text: str | bytes, width: int) -> bytes:
    """Pack text into exactly `width` bytes, zero padded.

    Input longer than the field is truncated to `width` bytes without error.
    """
    raw = text if isinstance(text, (bytes, bytearray)) else text.encode(ENCODING, ERRORS_MODE)
    if len(raw) > width:
        logger.debug("Truncating %d byte value to %d bytes: %r", len(raw), width, raw)
    buf = bytearray(width)
    chunk = raw[:width]
    buf[: len(chunk)] = chunk
    return bytes(buf)


def unpack_string(data: bytes) -> str:
    """Strip the trailing run of zero bytes and return the rest as text.

    Zero bytes before that run are kept as NUL characters.
    """
    return bytes(data).rstrip(b"\x00").decode(ENCODING, ERRORS_MODE)


def display_text(text: str) -> str:
    """Render a decoded field for the console."""
    return text.encode(ENCODING, ERRORS_MODE).decode(ENCODING, "replace")


def pack_flags(load_addr: int, exec_addr: int, reserved: int = 0) -> int:
    flags = reserved & RESERVED_FLAGS_MASK
    if load_addr or exec_addr:
        flags |= FLAG_CUSTOM_LOAD
    return flags


def reserved_flags(flags: int) -> int:
    """Flag bits other than the custom load bit."""
    return flags & RESERVED_FLAGS_MASK


def unpack_addresses(flags: int, load_addr: int, exec_addr: int) -> tuple[int, int]:
    """Return (load, exec), zeroed unless the custom load flag is set."""
    if flags & FLAG_CUSTOM_LOAD:
        return int(load_addr), int(exec_addr)
    if load_addr or exec_addr:
        logger.debug("Ignoring stale addresses 0x%08x/0x%08x, flag clear", load_addr, exec_addr)
    return 0, 0
