"""Marquee (.mrq) protocol constants.

Single source of truth for the on-disk signature and record layout.
Keep this file stable. Encoder and decoder must remain synchronized.
"""
import struct

EXTENSION = ".mrq"

# File signature: 'M' 'Q' followed by two zero bytes
SIGNATURE = b"MQ\x00\x00"
SIGNATURE_LEN = 4

# Fixed-width text fields, zero padded
TITLE_LEN = 48
DEVELOPER_LEN = 24
PUBLISHER_LEN = 24
YEAR_LEN = 4

# Flags word
FLAG_CUSTOM_LOAD = 0x0001
# Bits 1-15 are not interpreted; they are carried through unchanged.
RESERVED_FLAGS_MASK = 0xFFFE

# Field record:
# [Sig(4) | Title(48) | Dev(24) | Pub(24) | Year(4) | Flags(2) | Load(4) | Exec(4)] = 114 bytes
FIELDS_FMT = ">4s48s24s24s4sHII"
FIELDS_LEN = 114

# Image sizing
BOX_WIDTH = 88
BOX_HEIGHT = 124
SCREENSHOT_WIDTH = 88
SCREENSHOT_HEIGHT = 56

PIXEL_FMT = ">H"
PIXEL_LEN = 2

BOX_LEN = BOX_WIDTH * BOX_HEIGHT * PIXEL_LEN
SCREENSHOT_LEN = SCREENSHOT_WIDTH * SCREENSHOT_HEIGHT * PIXEL_LEN

TOTAL_LEN = FIELDS_LEN + BOX_LEN + SCREENSHOT_LEN

MAX_ADDRESS = 0xFFFFFFFF

assert struct.calcsize(FIELDS_FMT) == FIELDS_LEN
assert TOTAL_LEN == 31794


def validate_signature(data: bytes) -> bool:
    """Return True if data starts with the marquee signature."""
    return bytes(data[:SIGNATURE_LEN]) == SIGNATURE
