"""qcc - Hex literal encoding for embedded program text."""
from __future__ import annotations

import re

_HEX_DIGITS = re.compile(rb"[0-9a-fA-F]*")


class HexFormatError(ValueError):
    """Literal text is not a well-formed hex encoding."""


def hex_encode(data: bytes) -> bytes:
    """Encode bytes as two lowercase hex digits per byte, in input order."""
    return data.hex().encode("ascii")


def hex_decode(text: bytes | str) -> bytes:
    """Decode a hex literal back into the exact bytes it was made from."""
    if isinstance(text, str):
        try:
            text = text.encode("ascii")
        except UnicodeEncodeError:
            raise HexFormatError("hex literal contains non-ASCII characters") from None
    if len(text) % 2:
        raise HexFormatError(f"hex literal has odd length {len(text)}")
    if not _HEX_DIGITS.fullmatch(text):
        raise HexFormatError("hex literal contains non-hex-digit characters")
    return bytes.fromhex(text.decode("ascii"))
