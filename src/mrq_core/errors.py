"""Error kinds raised by the marquee codec."""
from __future__ import annotations

ERRORS = {
    "E_SIGNATURE": "Invalid marquee signature",
    "E_EOF": "Unexpected end of input",
    "E_TRAILING": "Trailing data after screenshot image",
    "E_BOX_IMAGE": "Invalid box image",
    "E_SCREENSHOT_IMAGE": "Invalid screenshot image",
    "E_ADDRESS": "Address out of range",
}


class MarqueeError(ValueError):
    """Base class for every marquee encode/decode failure."""

    code = ""

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = ERRORS[self.code]
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    def to_dict(self) -> dict:
        out = {"code": self.code, "message": ERRORS[self.code]}
        if self.detail:
            out["detail"] = self.detail
        return out


class InvalidSignature(MarqueeError):
    code = "E_SIGNATURE"

    def __init__(self, found: bytes):
        self.found = bytes(found)
        super().__init__(f"found {self.found.hex(' ') or 'nothing'}")


class UnexpectedEndOfInput(MarqueeError):
    code = "E_EOF"

    def __init__(self, state: str, needed: int, available: int):
        self.state = state
        self.needed = needed
        self.available = available
        super().__init__(f"{state} needs {needed} bytes, {available} available")


class TrailingData(MarqueeError):
    code = "E_TRAILING"

    def __init__(self, state: str, extra: int):
        self.state = state
        self.extra = extra
        super().__init__(f"{extra} extra bytes after {state}")


class InvalidImage(MarqueeError):
    """Raster dimensions do not match the format."""

    def __init__(self, size: tuple[int, int], expected: tuple[int, int]):
        self.size = tuple(size)
        self.expected = tuple(expected)
        super().__init__(
            f"got {self.size[0]}x{self.size[1]}, need {self.expected[0]}x{self.expected[1]}"
        )


class InvalidBoxImage(InvalidImage):
    code = "E_BOX_IMAGE"


class InvalidScreenshotImage(InvalidImage):
    code = "E_SCREENSHOT_IMAGE"


class InvalidAddress(MarqueeError):
    code = "E_ADDRESS"

    def __init__(self, name: str, value):
        self.name = name
        self.value = value
        super().__init__(f"{name}={value!r}")
