"""Marquee document codec: bytes <-> MarqueeDocument."""
from __future__ import annotations

import io
import logging
import struct
from enum import Enum
from pathlib import Path

from PIL import Image

from mrq_core.errors import (
    InvalidAddress,
    InvalidBoxImage,
    InvalidScreenshotImage,
    InvalidSignature,
    MarqueeError,
    TrailingData,
    UnexpectedEndOfInput,
)
from mrq_core.fields import pack_flags, pack_string, reserved_flags, unpack_addresses, unpack_string
from mrq_core.pixel import decode_pixels, encode_pixels
from mrq_core.protocol import (
    BOX_LEN,
    DEVELOPER_LEN,
    FIELDS_FMT,
    FIELDS_LEN,
    MAX_ADDRESS,
    PUBLISHER_LEN,
    SCREENSHOT_LEN,
    SIGNATURE,
    SIGNATURE_LEN,
    TITLE_LEN,
    YEAR_LEN,
    validate_signature,
)

from .document import BOX_SIZE, NATIVE_MODE, SCREENSHOT_SIZE, MarqueeDocument, prepare_raster

logger = logging.getLogger(__name__)


class DecodeState(str, Enum):
    START = "start"
    HEADER_READ = "header_read"
    FIELDS_READ = "fields_read"
    BOX_READ = "box_read"
    SCREENSHOT_READ = "screenshot_read"
    DONE = "done"
    ERROR = "error"


class MarqueeDecoder:
    """Single pass over an immutable buffer.

    START -> HEADER_READ -> FIELDS_READ -> BOX_READ -> SCREENSHOT_READ -> DONE,
    or ERROR from any step. A decoder is good for one call to `decode`.
    """

    def __init__(self, data: bytes):
        self._buf = io.BytesIO(bytes(data))
        self._size = len(data)
        self.state = DecodeState.START
        self.error: MarqueeError | None = None

    def _advance(self, state: DecodeState) -> None:
        logger.debug("Decode %s -> %s at offset %d", self.state.value, state.value, self._buf.tell())
        self.state = state

    def _read(self, n: int, what: str) -> bytes:
        chunk = self._buf.read(n)
        if len(chunk) < n:
            raise UnexpectedEndOfInput(what, n, len(chunk))
        return chunk

    def _read_image(self, n: int, size: tuple[int, int], what: str) -> Image.Image:
        return Image.frombytes(NATIVE_MODE, size, decode_pixels(self._read(n, what)))

    def decode(self) -> MarqueeDocument:
        if self.state is not DecodeState.START:
            raise RuntimeError(f"Decoder already used (state {self.state.value})")
        try:
            return self._decode()
        except MarqueeError as e:
            self.error = e
            self._advance(DecodeState.ERROR)
            raise

    def _decode(self) -> MarqueeDocument:
        record = self._read(FIELDS_LEN, "fields")
        if not validate_signature(record):
            raise InvalidSignature(record[:SIGNATURE_LEN])
        self._advance(DecodeState.HEADER_READ)

        _, title, developer, publisher, year, flags, load_addr, exec_addr = struct.unpack(
            FIELDS_FMT, record
        )
        load_addr, exec_addr = unpack_addresses(flags, load_addr, exec_addr)
        doc = MarqueeDocument(
            title=unpack_string(title),
            developer=unpack_string(developer),
            publisher=unpack_string(publisher),
            year=unpack_string(year),
            load_addr=load_addr,
            exec_addr=exec_addr,
            reserved_flags=reserved_flags(flags),
        )
        self._advance(DecodeState.FIELDS_READ)

        doc.box = self._read_image(BOX_LEN, BOX_SIZE, "box")
        self._advance(DecodeState.BOX_READ)

        doc.screenshot = self._read_image(SCREENSHOT_LEN, SCREENSHOT_SIZE, "screenshot")
        self._advance(DecodeState.SCREENSHOT_READ)

        extra = self._size - self._buf.tell()
        if extra:
            raise TrailingData(self.state.value, extra)
        self._advance(DecodeState.DONE)
        return doc


def decode(data: bytes) -> MarqueeDocument:
    """Decode a complete .mrq byte buffer into a fresh document."""
    return MarqueeDecoder(data).decode()


def _check_address(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_ADDRESS:
        raise InvalidAddress(name, value)
    return value


def encode(doc: MarqueeDocument) -> bytes:
    """Encode a document. Validation happens before any byte is produced."""
    box = prepare_raster(doc.box, BOX_SIZE, InvalidBoxImage)
    screenshot = prepare_raster(doc.screenshot, SCREENSHOT_SIZE, InvalidScreenshotImage)
    load_addr = _check_address("load_addr", doc.load_addr)
    exec_addr = _check_address("exec_addr", doc.exec_addr)

    flags = pack_flags(load_addr, exec_addr, doc.reserved_flags)
    record = struct.pack(
        FIELDS_FMT,
        SIGNATURE,
        pack_string(doc.title, TITLE_LEN),
        pack_string(doc.developer, DEVELOPER_LEN),
        pack_string(doc.publisher, PUBLISHER_LEN),
        pack_string(doc.year, YEAR_LEN),
        flags,
        load_addr,
        exec_addr,
    )
    return b"".join([record, encode_pixels(box.tobytes()), encode_pixels(screenshot.tobytes())])


def read_marquee(path: Path) -> MarqueeDocument:
    return decode(Path(path).read_bytes())


def write_marquee(doc: MarqueeDocument, path: Path) -> None:
    # Encode fully before touching the file.
    data = encode(doc)
    Path(path).write_bytes(data)
