import struct

import pytest
from PIL import Image

from mrq_codec import BOX_SIZE, SCREENSHOT_SIZE, DecodeState, MarqueeDecoder, MarqueeDocument, decode, encode
from mrq_codec import read_marquee, write_marquee
from mrq_core.errors import (
    InvalidAddress,
    InvalidBoxImage,
    InvalidScreenshotImage,
    InvalidSignature,
    MarqueeError,
    TrailingData,
    UnexpectedEndOfInput,
)
from mrq_core.protocol import BOX_LEN, FIELDS_LEN, SIGNATURE, TOTAL_LEN

TEMPEST_HEADER = bytes.fromhex(
    "4d510000"
    + "54656d706573742032303030" + "00" * 36
    + "4c6c616d61736f6674" + "00" * 15
    + "417461726920436f72706f726174696f6e" + "00" * 7
    + "31393934"
    + "0000" + "00000000" + "00000000"
)


def test_total_length(tempest):
    assert len(encode(tempest)) == TOTAL_LEN == 31794


def test_tempest_header_dump(tempest):
    data = encode(tempest)
    assert data[:0x74] == TEMPEST_HEADER + b"\x00\x00"
    assert data[:4] == b"MQ\x00\x00"
    assert data[4:52].rstrip(b"\x00") == b"Tempest 2000"
    assert data[52:76].rstrip(b"\x00") == b"Llamasoft"
    assert data[76:100].rstrip(b"\x00") == b"Atari Corporation"
    assert data[100:104] == b"1994"


def test_blank_images_encode_to_zero_words(tempest):
    assert encode(tempest)[FIELDS_LEN:] == b"\x00" * (TOTAL_LEN - FIELDS_LEN)


def test_round_trip_fields(tempest):
    tempest.load_addr = 0x00802000
    tempest.exec_addr = 0x00802010
    doc = decode(encode(tempest))
    assert doc.title == "Tempest 2000"
    assert doc.developer == "Llamasoft"
    assert doc.publisher == "Atari Corporation"
    assert doc.year == "1994"
    assert (doc.load_addr, doc.exec_addr) == (0x00802000, 0x00802010)
    assert doc.box.size == BOX_SIZE
    assert doc.screenshot.size == SCREENSHOT_SIZE


def test_address_flag_and_layout(tempest):
    tempest.load_addr = 0x00802000
    data = encode(tempest)
    assert struct.unpack(">HII", data[104:114]) == (1, 0x00802000, 0)
    assert decode(data).exec_addr == 0


def test_stale_addresses_are_zeroed_when_flag_clear(tempest):
    data = bytearray(encode(tempest))
    data[106:114] = struct.pack(">II", 0xDEADBEEF, 0xCAFEBABE)
    doc = decode(bytes(data))
    assert (doc.load_addr, doc.exec_addr) == (0, 0)
    assert not doc.custom_load


def test_overlong_text_is_truncated_without_error(tempest):
    tempest.title = "T" * 60
    tempest.developer = "D" * 30
    tempest.publisher = "P" * 25
    tempest.year = "19945"
    doc = decode(encode(tempest))
    assert doc.title == "T" * 48
    assert doc.developer == "D" * 24
    assert doc.publisher == "P" * 24
    assert doc.year == "1994"


def test_embedded_nul_is_kept(tempest):
    data = bytearray(encode(tempest))
    data[4:52] = b"Tempest\x002000" + b"\x00" * 36
    assert decode(bytes(data)).title == "Tempest\x002000"


def test_image_round_trip_is_idempotent_after_quantization(tempest):
    box = Image.new("RGBA", BOX_SIZE)
    px = box.load()
    for y in range(BOX_SIZE[1]):
        for x in range(BOX_SIZE[0]):
            px[x, y] = (x * 3 % 256, y * 2 % 256, (x * y) % 256, 255)
    tempest.box = box

    first = decode(encode(tempest))
    assert first.box.getpixel((5, 7)) == (15 & 0xF8, 14 & 0xFC, 35 & 0xF8, 255)
    second = decode(encode(first))
    assert second.box.tobytes() == first.box.tobytes()
    assert encode(second) == encode(first)


def test_pixels_are_row_major(tempest):
    tempest.box.putpixel((1, 0), (255, 0, 0, 255))
    tempest.screenshot.putpixel((0, 1), (0, 0, 255, 255))
    data = encode(tempest)
    assert data[FIELDS_LEN + 2 : FIELDS_LEN + 4] == b"\xf8\x00"
    shot = FIELDS_LEN + BOX_LEN + SCREENSHOT_SIZE[0] * 2
    assert data[shot : shot + 2] == b"\x07\xc0"


def test_non_rgba_images_are_converted_without_mutation(tempest):
    rgb = Image.new("RGB", BOX_SIZE, (200, 100, 50))
    grey = Image.new("L", SCREENSHOT_SIZE, 77)
    tempest.box = rgb
    tempest.screenshot = grey
    doc = decode(encode(tempest))
    assert rgb.mode == "RGB" and grey.mode == "L"
    assert doc.box.getpixel((0, 0)) == (200, 100, 48, 255)
    assert doc.screenshot.getpixel((0, 0)) == (72, 76, 72, 255)


def test_reserved_flags_survive_rewrite(tempest):
    data = bytearray(encode(tempest))
    # EEPROM size bits from older tools, custom load flag clear.
    data[104:106] = b"\x00\x06"
    doc = decode(bytes(data))
    assert doc.reserved_flags == 0x0006
    assert not doc.custom_load

    doc.title = "Tempest 2000 (edited)"
    assert encode(doc)[104:106] == b"\x00\x06"

    doc.load_addr = 0x00802000
    assert encode(doc)[104:106] == b"\x00\x07"


def test_reserved_flags_never_set_custom_load(tempest):
    tempest.reserved_flags = 0xFFFF
    data = encode(tempest)
    assert data[104:106] == b"\xff\xfe"
    assert not decode(data).custom_load


@pytest.mark.parametrize(
    "mode,value,expected",
    [
        ("I;16", 0x8080, (128, 128, 128, 255)),
        ("I;16", 0xFFFF, (248, 252, 248, 255)),
        ("I;16", 0x00FF, (0, 0, 0, 255)),
        ("I", 0xC8FF, (200, 200, 200, 255)),
    ],
)
def test_high_precision_images_keep_high_byte(tempest, mode, value, expected):
    src = Image.new(mode, BOX_SIZE, value)
    tempest.box = src
    doc = decode(encode(tempest))
    assert doc.box.getpixel((0, 0)) == expected
    assert src.mode == mode
    assert src.getpixel((0, 0)) == value


@pytest.mark.parametrize(
    "color,expected",
    [
        ((255, 0, 0, 0), (0, 0, 0, 255)),
        ((255, 0, 0, 255), (248, 0, 0, 255)),
        ((12, 200, 100, 0), (0, 0, 0, 255)),
    ],
)
def test_transparent_pixels_encode_as_black(tempest, color, expected):
    src = Image.new("RGBA", SCREENSHOT_SIZE, color)
    tempest.screenshot = src
    doc = decode(encode(tempest))
    assert doc.screenshot.getpixel((3, 3)) == expected
    assert src.getpixel((3, 3)) == color


def test_grey_alpha_images(tempest):
    src = Image.new("LA", BOX_SIZE, (200, 255))
    src.paste((200, 0), (0, 0, 10, 10))
    tempest.box = src
    doc = decode(encode(tempest))
    assert doc.box.getpixel((0, 0)) == (0, 0, 0, 255)
    assert doc.box.getpixel((20, 20)) == (200, 200, 200, 255)
    assert src.mode == "LA"


def test_palette_transparency(tempest):
    src = Image.new("P", BOX_SIZE, 1)
    src.putpalette([0, 0, 0, 255, 0, 0, 0, 0, 255])
    src.paste(2, (0, 0, 10, 10))
    src.info["transparency"] = 1
    tempest.box = src
    doc = decode(encode(tempest))
    assert doc.box.getpixel((0, 0)) == (0, 0, 248, 255)
    assert doc.box.getpixel((20, 20)) == (0, 0, 0, 255)
    assert src.mode == "P"


@pytest.mark.parametrize("size", [(89, 123), (88, 125), (124, 88)])
def test_invalid_box_size(tempest, size):
    tempest.box = Image.new("RGBA", size)
    with pytest.raises(InvalidBoxImage) as exc:
        encode(tempest)
    assert exc.value.code == "E_BOX_IMAGE"


def test_invalid_screenshot_size(tempest):
    tempest.screenshot = Image.new("RGBA", (89, 55))
    with pytest.raises(InvalidScreenshotImage):
        encode(tempest)


@pytest.mark.parametrize("value", [-1, 0x1_0000_0000, 1.5, "0x10", True])
def test_invalid_address(tempest, value):
    tempest.load_addr = value
    with pytest.raises(InvalidAddress):
        encode(tempest)


def test_decode_zeroed_body():
    doc = decode(SIGNATURE + b"\x00" * (TOTAL_LEN - 4))
    assert doc.title == ""
    assert doc.box.getpixel((0, 0)) == (0, 0, 0, 255)


def test_decode_bad_signature():
    with pytest.raises(InvalidSignature) as exc:
        decode(b"\x00" * TOTAL_LEN)
    assert exc.value.found == b"\x00\x00\x00\x00"


@pytest.mark.parametrize("sig", [b"MQ\x00\x01", b"mq\x00\x00", b"QM\x00\x00"])
def test_decode_signature_variants_rejected(sig):
    with pytest.raises(InvalidSignature):
        decode(sig + b"\x00" * (TOTAL_LEN - 4))


@pytest.mark.parametrize(
    "length,state",
    [
        (0, "fields"),
        (4, "fields"),
        (FIELDS_LEN - 1, "fields"),
        (FIELDS_LEN, "box"),
        (FIELDS_LEN + BOX_LEN - 1, "box"),
        (FIELDS_LEN + BOX_LEN, "screenshot"),
        (TOTAL_LEN - 1, "screenshot"),
    ],
)
def test_decode_truncated(length, state):
    data = (SIGNATURE + b"\x00" * TOTAL_LEN)[:length]
    with pytest.raises(UnexpectedEndOfInput) as exc:
        decode(data)
    assert exc.value.state == state


def test_decode_trailing_data():
    with pytest.raises(TrailingData) as exc:
        decode(SIGNATURE + b"\x00" * (TOTAL_LEN - 4 + 3))
    assert exc.value.extra == 3
    assert exc.value.state == "screenshot_read"


def test_decoder_states():
    dec = MarqueeDecoder(SIGNATURE + b"\x00" * (TOTAL_LEN - 4))
    assert dec.state is DecodeState.START
    dec.decode()
    assert dec.state is DecodeState.DONE
    with pytest.raises(RuntimeError):
        dec.decode()

    dec = MarqueeDecoder(SIGNATURE + b"\x00" * TOTAL_LEN)
    with pytest.raises(MarqueeError):
        dec.decode()
    assert dec.state is DecodeState.ERROR
    assert isinstance(dec.error, TrailingData)


def test_new_document_has_blank_images():
    doc = MarqueeDocument()
    assert doc.box.size == (88, 124) and doc.box.mode == "RGBA"
    assert doc.screenshot.size == (88, 56) and doc.screenshot.mode == "RGBA"
    assert not doc.custom_load


def test_file_helpers(tmp_path, tempest):
    p = tmp_path / "Tempest 2000.mrq"
    write_marquee(tempest, p)
    assert p.stat().st_size == TOTAL_LEN
    assert read_marquee(p).title == "Tempest 2000"


def test_write_marquee_leaves_no_file_on_error(tmp_path, tempest):
    tempest.box = Image.new("RGBA", (1, 1))
    p = tmp_path / "bad.mrq"
    with pytest.raises(InvalidBoxImage):
        write_marquee(tempest, p)
    assert not p.exists()
