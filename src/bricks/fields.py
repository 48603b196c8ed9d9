"""
Typed, validated and randomizable brick settings.

A field never holds a value that fails its validity predicate: assigning an
invalid value raises :class:`~bricks.exceptions.InvalidInputError` and keeps
the previous value.

Fields are declared by bricks as plain mappings and built by :func:`create_field`::

    brick.add_settings(
        {
            "name": "format",
            "type": "enum",
            "value": "hexadecimal",
            "elements": ["hexadecimal", "binary"],
            "labels": ["Hexadecimal", "Binary"],
            "width": 6,
            "randomizable": False,
        },
    )
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from string import ascii_lowercase
from typing import Any, ClassVar

from numpy.random import Generator

from bricks.exceptions import ConfigurationError, InvalidInputError
from bricks.models import FieldSchema, FieldType
from conversion.byte_encoder import bytes_from_hex_string, hex_string_from_bytes
from conversion.exceptions import ByteEncodingError

type FieldListener = Callable[[SettingField], None]


class SettingField[T](ABC):
    type: ClassVar[FieldType]

    def __init__(
        self,
        name: str,
        value: T,
        *,
        label: str | None = None,
        width: int = 12,
        randomizable: bool = True,
    ) -> None:
        if not name:
            raise ConfigurationError("Setting name cannot be empty")
        self.name = name
        self.label = label or name[:1].upper() + name[1:]
        self.width = width
        self.randomizable = randomizable
        self._listeners: list[FieldListener] = []
        self._check(value)
        self._value = value

    @abstractmethod
    def is_valid(self, value: Any) -> bool:
        """Return whether the value satisfies the validity predicate of this field."""

    @abstractmethod
    def random_value(self, rng: Generator) -> T:
        """Return a valid value drawn from the given random generator."""

    def _check(self, value: Any) -> None:
        if not self.is_valid(value):
            raise InvalidInputError(self.name, value)

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self.set_value(value)

    def set_value(self, value: T) -> bool:
        """
        Assign a new value and notify listeners if it changed.

        :return: Whether the value changed.
        :raises InvalidInputError: If the value is invalid; the prior value is retained.
        """
        self._check(value)
        if self._is_same(value):
            return False
        self._value = value
        for listener in self._listeners:
            listener(self)
        return True

    def _is_same(self, value: Any) -> bool:
        return type(value) is type(self._value) and value == self._value

    def subscribe(self, listener: FieldListener) -> None:
        self._listeners.append(listener)

    def randomize(self, rng: Generator) -> bool:
        """Assign a random value if the field is randomizable."""
        if not self.randomizable:
            return False
        return self.set_value(self.random_value(rng))

    def serialize_value(self) -> Any:
        """Return the value in a JSON-safe form."""
        return self._value

    def deserialize_value(self, raw: Any) -> T:
        """Parse a value produced by :meth:`serialize_value`."""
        return raw

    def describe(self) -> FieldSchema:
        return FieldSchema(
            name=self.name,
            type=self.type,
            value=self.serialize_value(),
            label=self.label,
            width=self.width,
            randomizable=self.randomizable,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, value={self._value!r})"


class EnumField(SettingField[Any]):
    type = "enum"

    def __init__(self, name: str, value: Any, *, elements: Sequence[Any], labels: Sequence[str] | None = None, **kwargs: Any) -> None:
        if not elements:
            raise ConfigurationError(f"Enum setting '{name}' needs at least one element")
        if labels is not None and len(labels) != len(elements):
            raise ConfigurationError(f"Enum setting '{name}' needs one label per element")
        self.elements = tuple(elements)
        self.labels = tuple(labels) if labels is not None else tuple(str(element) for element in elements)
        super().__init__(name, value, **kwargs)

    def is_valid(self, value: Any) -> bool:
        # Matches by type too, True must not pass for 1
        return any(type(value) is type(element) and value == element for element in self.elements)

    def random_value(self, rng: Generator) -> Any:
        return self.elements[int(rng.integers(len(self.elements)))]

    def label_of(self, value: Any) -> str:
        return self.labels[self.elements.index(value)]

    def describe(self) -> FieldSchema:
        return super().describe().model_copy(update={"elements": list(self.elements), "labels": list(self.labels)})


class BooleanField(SettingField[bool]):
    type = "boolean"

    def is_valid(self, value: Any) -> bool:
        return isinstance(value, bool)

    def random_value(self, rng: Generator) -> bool:
        return bool(rng.integers(2))


class TextField(SettingField[str]):
    type = "text"

    def __init__(
        self,
        name: str,
        value: str,
        *,
        min_length: int = 0,
        max_length: int | None = None,
        allowed_characters: str | None = None,
        unique_characters: bool = False,
        **kwargs: Any,
    ) -> None:
        if unique_characters and min_length > len(set(allowed_characters or ascii_lowercase)):
            raise ConfigurationError(f"Text setting '{name}' cannot hold {min_length} unique characters")
        self.min_length = min_length
        self.max_length = max_length
        self.allowed_characters = allowed_characters
        self.unique_characters = unique_characters
        super().__init__(name, value, **kwargs)

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str) or len(value) < self.min_length:
            return False
        if self.max_length is not None and len(value) > self.max_length:
            return False
        if self.allowed_characters is not None and not set(value) <= set(self.allowed_characters):
            return False
        return not self.unique_characters or len(set(value)) == len(value)

    def random_value(self, rng: Generator) -> str:
        pool = self.allowed_characters or ascii_lowercase
        upper = self.max_length if self.max_length is not None else max(self.min_length, 8)
        if self.unique_characters:
            upper = min(upper, len(set(pool)))
        length = int(rng.integers(self.min_length, upper + 1))
        characters = rng.choice(list(dict.fromkeys(pool)), size=length, replace=not self.unique_characters)
        return "".join(characters)


class NumberField(SettingField[int | float]):
    type = "number"

    def __init__(
        self,
        name: str,
        value: int | float,
        *,
        minimum: int | float | None = None,
        maximum: int | float | None = None,
        integer: bool = True,
        **kwargs: Any,
    ) -> None:
        self.minimum = minimum
        self.maximum = maximum
        self.integer = integer
        super().__init__(name, value, **kwargs)

    def is_valid(self, value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return False
        if self.integer and not isinstance(value, int):
            return False
        if self.minimum is not None and value < self.minimum:
            return False
        return self.maximum is None or value <= self.maximum

    def random_value(self, rng: Generator) -> int | float:
        low = self.minimum if self.minimum is not None else 0
        high = self.maximum if self.maximum is not None else low + 100
        if self.integer:
            return int(rng.integers(low, high + 1))
        return float(rng.uniform(low, high))


class BytesField(SettingField[bytes]):
    type = "bytes"

    def __init__(self, name: str, value: bytes, *, min_size: int = 0, max_size: int | None = None, **kwargs: Any) -> None:
        self.min_size = min_size
        self.max_size = max_size
        super().__init__(name, value, **kwargs)

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, bytes) or len(value) < self.min_size:
            return False
        return self.max_size is None or len(value) <= self.max_size

    def random_value(self, rng: Generator) -> bytes:
        upper = self.max_size if self.max_size is not None else max(self.min_size, 16)
        size = int(rng.integers(self.min_size, upper + 1))
        return rng.bytes(size)

    def serialize_value(self) -> str:
        return hex_string_from_bytes(self._value)

    def deserialize_value(self, raw: Any) -> bytes:
        if not isinstance(raw, str):
            raise InvalidInputError(self.name, raw, "expected a hex string")
        try:
            return bytes_from_hex_string(raw)
        except ByteEncodingError as error:
            raise InvalidInputError(self.name, raw, str(error)) from error


FIELD_TYPES: dict[str, type[SettingField]] = {
    field_class.type: field_class
    for field_class in (EnumField, BooleanField, TextField, NumberField, BytesField)
}


def create_field(declaration: Mapping[str, Any]) -> SettingField:
    """
    Build a settings field from its declaration.

    :param declaration: Mapping holding ``name``, ``type``, ``value`` and the
        keyword arguments of the field class.
    :raises ConfigurationError: If the field type is unknown or the declaration is incomplete.
    """
    options = dict(declaration)
    field_type = options.pop("type", None)
    if field_type not in FIELD_TYPES:
        raise ConfigurationError(f"Unknown setting type '{field_type}'")
    try:
        return FIELD_TYPES[field_type](**options)
    except TypeError as error:
        raise ConfigurationError(f"Invalid declaration for setting '{options.get('name')}': {error}") from error
