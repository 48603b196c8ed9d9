"""Content value exchanged between bricks.

Architecture
------------
::

    +------------------------------------------+
    |                 Content                  |
    |------------------------------------------|
    | data : bytes                             |
    +------------------------------------------+
    | from_bytes(data) -> cls                  |
    | from_text(text, encoding) -> cls         |
    | from_code_points(code_points) -> cls     |
    | wrap(value) -> cls                       |
    | get_text(encoding, lenient) -> str       |
    | get_code_points(encoding) -> tuple[int]  |
    +------------------------------------------+

- Bytes are the primary representation, text and code points are derived
  lazily and memoized per representation kind on the (immutable) instance.
- Compared and hashed by bytes only.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr, StrictBytes

from conversion.text_encoder import (
    DEFAULT_TEXT_ENCODING,
    bytes_from_text,
    code_points_from_text,
    text_from_bytes,
    text_from_code_points,
)

type RepresentationKey = tuple[str, str, bool]


class Content(BaseModel):
    data: StrictBytes = b""

    _representations: dict[RepresentationKey, Any] = PrivateAttr(default_factory=dict)

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Content:
        return cls(data=bytes(data))

    @classmethod
    def from_text(cls, text: str, encoding: str = DEFAULT_TEXT_ENCODING) -> Content:
        """
        Create content from text.

        :raises TextEncodingError: If the text cannot be encoded using the encoding.
        """
        content = cls(data=bytes_from_text(text, encoding))
        content._representations[("text", encoding, False)] = text
        return content

    @classmethod
    def from_code_points(cls, code_points: Sequence[int]) -> Content:
        """
        Create content from Unicode code points, stored as UTF-8 bytes.

        :raises TextEncodingError: If a code point is invalid or not encodable.
        """
        code_points = tuple(code_points)
        content = cls.from_text(text_from_code_points(code_points))
        content._representations[("code_points", DEFAULT_TEXT_ENCODING, False)] = code_points
        return content

    @classmethod
    def wrap(cls, value: Content | bytes | bytearray | memoryview | str | Sequence[int]) -> Content:
        """Wrap a value of any supported representation into content."""
        match value:
            case Content():
                return value
            case bytes() | bytearray() | memoryview():
                return cls.from_bytes(value)
            case str():
                return cls.from_text(value)
            case _:
                return cls.from_code_points(value)

    def _memoize[T](self, key: RepresentationKey, compute: Callable[[], T]) -> T:
        if key not in self._representations:
            self._representations[key] = compute()
        return self._representations[key]

    def get_bytes(self) -> bytes:
        return self.data

    def get_text(self, encoding: str = DEFAULT_TEXT_ENCODING, *, lenient: bool = False) -> str:
        """
        Return the text representation under the given encoding.

        :param encoding: Text encoding name.
        :param lenient: Substitute malformed sequences by replacement characters.
        :raises TextEncodingError: If the bytes are malformed and ``lenient`` is not set.
        """
        return self._memoize(
            ("text", encoding, lenient),
            lambda: text_from_bytes(self.data, encoding, lenient=lenient),
        )

    def get_code_points(self, encoding: str = DEFAULT_TEXT_ENCODING) -> tuple[int, ...]:
        return self._memoize(
            ("code_points", encoding, False),
            lambda: code_points_from_text(self.get_text(encoding)),
        )

    def is_empty(self) -> bool:
        return not self.data

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Content):
            return NotImplemented
        return self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Content(data={self.data!r})"
