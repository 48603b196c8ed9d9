from __future__ import annotations

from abc import abstractmethod
from collections.abc import Awaitable
from inspect import isawaitable
from typing import Any, ClassVar

from returns.result import Failure, ResultE, Success

from bricks.base import Brick
from bricks.exceptions import InvalidInputError, TransformError
from bricks.fields import SettingField
from bricks.models import BrickState, Direction
from container_models import Content
from conversion.exceptions import ConversionError
from utils.logger import FailureLevel, log_railway_function

type CacheKey = tuple[Content, Direction, bool, tuple[tuple[str, Any], ...]]


def _as_transform_error(error: Exception) -> TransformError:
    if isinstance(error, TransformError):
        return error
    transform_error = TransformError(str(error))
    transform_error.__cause__ = error
    return transform_error


class Encoder(Brick):
    """
    Brick translating content into content.

    Subclasses implement :meth:`perform_encode` and, unless encode only,
    :meth:`perform_decode`. Both may be coroutines for encoders delegating to
    an external computation.

    ``reversible`` declares that ``perform_decode(perform_encode(x)) == x``
    holds for every content the encoder accepts.
    """

    reversible: ClassVar[bool] = True

    def __init__(self) -> None:
        super().__init__()
        self._reversed = False
        self._cache_key: CacheKey | None = None
        self._output: Content | None = None

    @property
    def reversed(self) -> bool:
        """Whether encode and decode roles are swapped."""
        return self._reversed

    @reversed.setter
    def reversed(self, value: bool) -> None:
        if value != self._reversed:
            self._reversed = value
            self.invalidate()

    @property
    def output(self) -> Content | None:
        """Output of the last successful transform."""
        return self._output

    def invalidate(self) -> None:
        self._cache_key = None

    def settings_did_change(self, field: SettingField) -> None:
        self.invalidate()

    def serialize(self) -> BrickState:
        return super().serialize().model_copy(update={"reversed": self._reversed})

    def is_encoding(self, direction: Direction) -> bool:
        return (direction is Direction.FORWARD) != self._reversed

    @log_railway_function("Encoder transform failed", failure_level=FailureLevel.WARNING)
    async def transform(self, content: Content, direction: Direction = Direction.FORWARD) -> ResultE[Content]:
        """
        Translate content in the given direction.

        A failure marks the encoder broken and keeps the last good output.

        :param content: Input content.
        :param direction: ``FORWARD`` encodes and ``REVERSE`` decodes, swapped if reversed.
        :return: ``Success`` holding the output or ``Failure`` holding a :class:`TransformError`.
        """
        key: CacheKey = (content, direction, self._reversed, self.settings_snapshot())
        if self._cache_key == key and self._output is not None:
            self.mark_ok()
            return Success(self._output)

        result = await self._translate(content, self.is_encoding(direction))
        match result:
            case Success(output):
                self._cache_key = key
                self._output = output
                self.mark_ok()
            case Failure(error):
                self.mark_broken(error)
        return result

    async def _translate(self, content: Content, encode: bool) -> ResultE[Content]:
        try:
            output = self.perform_encode(content) if encode else self.perform_decode(content)
            if isawaitable(output):
                output = await output
        except (TransformError, ConversionError, InvalidInputError) as error:
            return Failure(_as_transform_error(error))
        return Success(output)

    @abstractmethod
    def perform_encode(self, content: Content) -> Content | Awaitable[Content]:
        """Encode the given content."""

    def perform_decode(self, content: Content) -> Content | Awaitable[Content]:
        """Decode the given content, encode only bricks keep this default."""
        raise TransformError(f"Brick '{self.name}' cannot decode content")
