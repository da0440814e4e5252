"""qcc Core - Shared hex encoding and emitted-program text blocks."""
from .hexcodec import HexFormatError, hex_decode, hex_encode

__all__ = ["HexFormatError", "hex_decode", "hex_encode"]
