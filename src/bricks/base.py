"""
Brick Architecture
==================

A brick is one configurable stage of a pipe. Two kinds exist:

- :class:`~bricks.encoder.Encoder` transforms content into content, in either direction.
- :class:`~bricks.viewer.Viewer` bridges content to and from a visible, editable text.

High-level Design
-----------------

                        +---------------------------------+
                        |          <<abstract>>           |
                        |              Brick              |
                        |---------------------------------|
                        | meta     : BrickMeta            |
                        | settings : SettingField[]       |
                        | error    : Exception | None     |
                        +---------------+-----------------+
                                        ^
                                        |
                  +---------------------+---------------------+
                  |                                           |
    +-------------+--------------+              +-------------+-------------+
    |          Encoder           |              |          Viewer           |
    |----------------------------|              |---------------------------|
    | reversed : bool            |              | content : Content | None  |
    | output   : Content | None  |              | text    : str             |
    +----------------------------+              +---------------------------+
    | transform(content, dir)    |              | render(content)           |
    |   -> ResultE[Content]      |              | edit(text)                |
    +----------------------------+              +---------------------------+

Shared capabilities (identity, settings access, broken state) live here;
kind specific operations are checked through :attr:`Brick.type`.
"""

from __future__ import annotations

from abc import ABC
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from loguru import logger
from numpy.random import Generator

from bricks.exceptions import ConfigurationError, InvalidInputError
from bricks.fields import SettingField, create_field
from bricks.models import BrickMeta, BrickState, BrickType

type SettingsListener = Callable[[Brick, SettingField], None]


class Brick(ABC):
    meta: ClassVar[BrickMeta]

    def __init__(self) -> None:
        self._fields: dict[str, SettingField] = {}
        self._listeners: list[SettingsListener] = []
        self._error: Exception | None = None

    @classmethod
    def get_meta(cls) -> BrickMeta:
        return cls.meta

    @property
    def name(self) -> str:
        return self.meta.name

    @property
    def type(self) -> BrickType:
        return self.meta.type

    # Settings

    def add_settings(self, *declarations: Mapping[str, Any] | SettingField) -> None:
        """
        Add settings fields, given as fields or as field declarations.

        :raises ConfigurationError: If a setting name is already taken.
        """
        for declaration in declarations:
            field = declaration if isinstance(declaration, SettingField) else create_field(declaration)
            if field.name in self._fields:
                raise ConfigurationError(f"Setting '{field.name}' is already defined on brick '{self.name}'")
            field.subscribe(self._setting_did_change)
            self._fields[field.name] = field

    @property
    def settings(self) -> tuple[SettingField, ...]:
        return tuple(self._fields.values())

    def get_setting(self, name: str) -> SettingField:
        try:
            return self._fields[name]
        except KeyError:
            raise InvalidInputError(name, None, f"brick '{self.name}' has no such setting") from None

    def get_setting_value(self, name: str) -> Any:
        return self.get_setting(name).value

    def set_setting_value(self, name: str, value: Any) -> bool:
        """
        Assign a setting value.

        :return: Whether the value changed.
        :raises InvalidInputError: If the value is rejected; the prior value is retained.
        """
        return self.get_setting(name).set_value(value)

    def settings_snapshot(self) -> tuple[tuple[str, Any], ...]:
        return tuple((field.name, field.value) for field in self._fields.values())

    def randomize_settings(self, rng: Generator) -> None:
        for field in self._fields.values():
            field.randomize(rng)

    def on_settings_change(self, listener: SettingsListener) -> None:
        self._listeners.append(listener)

    def off_settings_change(self, listener: SettingsListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _setting_did_change(self, field: SettingField) -> None:
        logger.debug(f"Setting '{field.name}' of brick '{self.name}' changed to {field.value!r}")
        self.settings_did_change(field)
        for listener in list(self._listeners):
            listener(self, field)

    def settings_did_change(self, field: SettingField) -> None:
        """Hook triggered after a setting value changed."""

    # Broken state

    @property
    def error(self) -> Exception | None:
        return self._error

    @property
    def is_broken(self) -> bool:
        return self._error is not None

    def mark_broken(self, error: Exception) -> None:
        self._error = error

    def mark_ok(self) -> None:
        self._error = None

    # Serialization

    def serialize(self) -> BrickState:
        return BrickState(
            brick=self.name,
            settings={field.name: field.serialize_value() for field in self._fields.values()},
        )

    def apply_setting(self, name: str, raw: Any) -> bool:
        """
        Apply one serialized setting value.

        :return: Whether the value changed.
        :raises InvalidInputError: If the setting is unknown or the value is rejected.
        """
        field = self.get_setting(name)
        return field.set_value(field.deserialize_value(raw))

    def apply_settings(self, values: Mapping[str, Any]) -> None:
        """
        Apply serialized settings values.

        :raises InvalidInputError: On the first unknown setting or rejected value.
        """
        for name, raw in values.items():
            self.apply_setting(name, raw)

    def __repr__(self) -> str:
        status = f"broken: {self._error}" if self._error else "ok"
        return f"<{type(self).__name__} '{self.name}' ({status})>"
