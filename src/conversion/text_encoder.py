"""Translations between text, bytes and Unicode code points."""

import codecs
from collections.abc import Iterable
from typing import Final

from conversion.exceptions import TextEncodingError

DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"

TEXT_ENCODINGS: Final[tuple[str, ...]] = (
    "utf-8",
    "utf-16le",
    "utf-16be",
    "utf-32le",
    "utf-32be",
    "latin-1",
    "ascii",
)

MAX_CODE_POINT: Final[int] = 0x10FFFF


def _ensure_known_encoding(encoding: str) -> None:
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise TextEncodingError(f"Unknown text encoding '{encoding}'") from None


def bytes_from_text(text: str, encoding: str = DEFAULT_TEXT_ENCODING, *, lenient: bool = False) -> bytes:
    """
    Encode text into bytes.

    :param text: Text to encode.
    :param encoding: Text encoding name.
    :param lenient: Substitute unencodable characters instead of failing.
    :raises TextEncodingError: If the text cannot be encoded.
    """
    _ensure_known_encoding(encoding)
    try:
        return text.encode(encoding, errors="replace" if lenient else "strict")
    except UnicodeEncodeError as error:
        raise TextEncodingError(
            f"Character at index {error.start} cannot be encoded using {encoding}"
        ) from error


def text_from_bytes(data: bytes, encoding: str = DEFAULT_TEXT_ENCODING, *, lenient: bool = False) -> str:
    """
    Decode bytes into text.

    :param data: Bytes to decode.
    :param encoding: Text encoding name.
    :param lenient: Substitute malformed sequences by replacement characters instead of failing.
    :raises TextEncodingError: If the bytes are malformed under the encoding.
    """
    _ensure_known_encoding(encoding)
    try:
        return data.decode(encoding, errors="replace" if lenient else "strict")
    except UnicodeDecodeError as error:
        raise TextEncodingError(
            f"Invalid {encoding} byte sequence at index {error.start}"
        ) from error


def code_points_from_text(text: str) -> tuple[int, ...]:
    return tuple(ord(character) for character in text)


def text_from_code_points(code_points: Iterable[int]) -> str:
    """
    Return the text made of the given code points.

    :raises TextEncodingError: If a code point is outside the Unicode range.
    """
    characters = []
    for index, code_point in enumerate(code_points):
        if not 0 <= code_point <= MAX_CODE_POINT:
            raise TextEncodingError(f"Invalid code point {code_point} at index {index}")
        characters.append(chr(code_point))
    return "".join(characters)
