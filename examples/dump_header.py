"""Dump the head of a .mrq file: the field record and the first box pixel word."""
from __future__ import annotations

import sys
from pathlib import Path

from mrq_core.protocol import FIELDS_LEN, PIXEL_LEN

DUMP_LEN = FIELDS_LEN + PIXEL_LEN  # 0x74


def hex_dump(data: bytes) -> str:
    lines = []
    for off in range(0, len(data), 16):
        row = data[off : off + 16]
        left = " ".join(f"{b:02x}" for b in row[:8])
        right = " ".join(f"{b:02x}" for b in row[8:])
        text = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in row)
        lines.append(f"{off:08x}  {left:<23}  {right:<23}  |{text}|")
    return "\n".join(lines)


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python dump_header.py <file.mrq>")
        sys.exit(1)

    data = Path(sys.argv[1]).read_bytes()
    print(hex_dump(data[:DUMP_LEN]))


if __name__ == "__main__":
    main()
