import errno
import io

import pytest

from qcc_core.hexcodec import hex_decode
from qcc_core.protocol import CHUNK_SIZE
from qcc_compile import streams
from qcc_compile.streams import DualChannelWriter, ScratchAllocationError, forward_chunks


def test_visible_and_staged_copies_agree():
    visible = io.BytesIO()
    staged = io.BytesIO()
    pieces = [b"/* banner */\n", b"", b'char *s = "\\"\\0";\n', b"\x00\xff", b"\n"]

    with DualChannelWriter(visible) as writer:
        for piece in pieces:
            writer.emit(piece)
        copied = writer.replay(staged)

    assert visible.getvalue() == b"".join(pieces)
    assert hex_decode(staged.getvalue()) == visible.getvalue()
    assert copied == 2 * len(visible.getvalue())
    assert writer.staged_bytes == len(visible.getvalue())
    assert writer.scratch.closed


def test_forward_chunks_spans_many_chunks_and_flags_nul():
    source = (b"x" * (CHUNK_SIZE - 1)) + b"\x00" + (b"y" * CHUNK_SIZE * 2)
    visible = io.BytesIO()

    with DualChannelWriter(visible) as writer:
        saw_nul = forward_chunks(io.BytesIO(source), writer)

    assert saw_nul
    assert visible.getvalue() == source


def test_scratch_allocation_failure(monkeypatch):
    def no_space():
        raise OSError(errno.ENOSPC, "No space left on device")

    monkeypatch.setattr(streams.tempfile, "TemporaryFile", no_space)

    with pytest.raises(ScratchAllocationError) as info:
        DualChannelWriter(io.BytesIO())
    assert info.value.errno == errno.ENOSPC
