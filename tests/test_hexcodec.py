import pytest

from qcc_core import HexFormatError, hex_decode, hex_encode


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\x00\x00abc\x00",
        b'printf("a \\"quoted\\" \\\\ string");\n',
        b"line one\nline two\r\n\tline three\n",
        bytes(range(256)),
    ],
)
def test_round_trip(data):
    assert hex_decode(hex_encode(data)) == data


def test_encode_is_lowercase_and_zero_padded():
    assert hex_encode(b"\x00\x0a\xff\"\\") == b"000aff225c"
    assert hex_encode(b"") == b""


def test_decode_accepts_str():
    assert hex_decode("68690a") == b"hi\n"


@pytest.mark.parametrize("bad", [b"abc", b"zz", b"6 8", b"68\n", "68é9"])
def test_decode_rejects_malformed(bad):
    with pytest.raises(HexFormatError):
        hex_decode(bad)
