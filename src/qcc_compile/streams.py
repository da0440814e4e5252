from __future__ import annotations

import tempfile
from typing import BinaryIO

from qcc_core.hexcodec import hex_encode
from qcc_core.protocol import CHUNK_SIZE


class ScratchAllocationError(OSError):
    """The scratch accumulation target could not be created."""


class DualChannelWriter:
    """Dual-channel staging: every emitted byte is both staged and shown.

    - The scratch target receives the hex encoding of each write.
    - The visible stream receives the same write verbatim.
    """

    def __init__(self, visible: BinaryIO):
        self.visible = visible
        self.staged_bytes = 0
        try:
            self.scratch = tempfile.TemporaryFile()
        except OSError as e:
            raise ScratchAllocationError(e.errno, f"error creating temporary file: {e.errno}") from e

    def __enter__(self) -> DualChannelWriter:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.scratch.close()

    def emit(self, text: bytes) -> None:
        if not text:
            return
        self.scratch.write(hex_encode(text))
        self.visible.write(text)
        self.staged_bytes += len(text)

    def replay(self, sink: BinaryIO) -> int:
        """Copy the staged hex back out to sink.

        Returns the number of literal bytes copied.
        """
        self.scratch.flush()
        self.scratch.seek(0)
        copied = 0
        while True:
            chunk = self.scratch.read(CHUNK_SIZE)
            if not chunk:
                break
            sink.write(chunk)
            copied += len(chunk)
        return copied


def forward_chunks(fp: BinaryIO, writer: DualChannelWriter) -> bool:
    """Forward fp through writer in fixed-size chunks.

    Returns True when a NUL byte was seen.
    """
    saw_nul = False
    while True:
        chunk = fp.read(CHUNK_SIZE)
        if not chunk:
            break
        if b"\x00" in chunk:
            saw_nul = True
        writer.emit(chunk)
    return saw_nul
