import pytest
from hypothesis import given
from hypothesis import strategies as st

from conversion.exceptions import TextEncodingError
from conversion.text_encoder import (
    TEXT_ENCODINGS,
    bytes_from_text,
    code_points_from_text,
    text_from_bytes,
    text_from_code_points,
)
from conversion.utils import chunk


@pytest.mark.parametrize(
    "encoding, expected",
    [
        pytest.param("utf-8", b"\xc3\xa9", id="utf-8"),
        pytest.param("utf-16le", b"\xe9\x00", id="utf-16le"),
        pytest.param("utf-16be", b"\x00\xe9", id="utf-16be"),
        pytest.param("utf-32be", b"\x00\x00\x00\xe9", id="utf-32be"),
        pytest.param("latin-1", b"\xe9", id="latin-1"),
    ],
)
def test_bytes_from_text(encoding: str, expected: bytes):
    assert bytes_from_text("é", encoding) == expected


def test_unencodable_character_fails():
    with pytest.raises(TextEncodingError, match="index 1 cannot be encoded using ascii"):
        bytes_from_text("aé", "ascii")


def test_malformed_bytes_fail_unless_lenient():
    # Arrange
    data = b"ok\xff"

    # Act & Assert
    with pytest.raises(TextEncodingError, match="Invalid utf-8 byte sequence at index 2"):
        text_from_bytes(data)
    assert text_from_bytes(data, lenient=True) == "ok�"


def test_unknown_encoding_fails():
    with pytest.raises(TextEncodingError, match="Unknown text encoding 'klingon'"):
        text_from_bytes(b"", "klingon")


@pytest.mark.parametrize("encoding", [encoding for encoding in TEXT_ENCODINGS if encoding.startswith("utf")])
@given(text=st.text())
def test_unicode_round_trip(encoding: str, text: str):
    assert text_from_bytes(bytes_from_text(text, encoding), encoding) == text


class TestCodePoints:
    def test_code_points_from_text(self):
        assert code_points_from_text("a🙂") == (97, 0x1F642)

    def test_text_from_code_points(self):
        assert text_from_code_points([104, 105]) == "hi"

    @pytest.mark.parametrize("code_point", [-1, 0x110000])
    def test_out_of_range_code_point_fails(self, code_point: int):
        with pytest.raises(TextEncodingError, match=f"Invalid code point {code_point} at index 1"):
            text_from_code_points([65, code_point])


class TestChunk:
    @pytest.mark.parametrize(
        "string, size, expected",
        [
            pytest.param("abcdefg", 3, ["abc", "def", "g"], id="remainder"),
            pytest.param("abcdef", 3, ["abc", "def"], id="exact"),
            pytest.param("", 3, [], id="empty"),
        ],
    )
    def test_chunk(self, string: str, size: int, expected: list[str]):
        assert chunk(string, size) == expected

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValueError, match="must be positive"):
            chunk("abc", 0)
