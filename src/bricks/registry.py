"""Process-wide brick registry."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from loguru import logger

from bricks.base import Brick
from bricks.exceptions import BrickAlreadyRegisteredError, UnknownBrickError
from bricks.models import BrickMeta

type BrickInvokable = type[Brick]


@dataclass(frozen=True)
class RegisteredBrick:
    """A brick constructor bundled with its registration metadata.

    :param invokable: Brick class, instantiated without arguments
    :param metadata: Static brick descriptor
    """

    invokable: BrickInvokable
    metadata: BrickMeta

    @property
    def name(self) -> str:
        return self.metadata.name

    def __call__(self) -> Brick:
        brick = self.invokable()
        if brick.meta != self.metadata:
            brick.meta = self.metadata
        return brick


class BrickRegistry:
    """Registry mapping brick identifiers to brick constructors.

    Identifiers are unique and kept in registration order.

    Example:
        >>> registry = BrickRegistry()
        >>> _ = registry.register(ReverseEncoder)
        >>> registry.create("reverse")
        <ReverseEncoder 'reverse' (ok)>
    """

    def __init__(self, invokables: Iterable[BrickInvokable] = ()) -> None:
        self._bricks: dict[str, RegisteredBrick] = {}
        for invokable in invokables:
            self.register(invokable)

    def register(self, invokable: BrickInvokable, identifier: str | None = None) -> RegisteredBrick:
        """Register a brick class.

        :param invokable: Brick class exposing ``get_meta()``
        :param identifier: Registration identifier, defaults to the meta name.
            Instances created under another identifier report it as their name.
        :returns: The registration entry
        :raises BrickAlreadyRegisteredError: If the identifier is already registered
        """
        metadata = invokable.get_meta()
        if identifier is not None and identifier != metadata.name:
            metadata = metadata.model_copy(update={"name": identifier})
        if metadata.name in self._bricks:
            raise BrickAlreadyRegisteredError(metadata.name)

        registered = RegisteredBrick(invokable=invokable, metadata=metadata)
        self._bricks[metadata.name] = registered
        logger.debug(f"Registered brick '{metadata.name}' ({metadata.type})")
        return registered

    def get_invokable(self, identifier: str) -> RegisteredBrick:
        """:raises UnknownBrickError: If the identifier is not registered"""
        try:
            return self._bricks[identifier]
        except KeyError:
            raise UnknownBrickError(identifier) from None

    def get_meta(self, identifier: str) -> BrickMeta:
        return self.get_invokable(identifier).metadata

    def get_library(self) -> list[BrickMeta]:
        """List the metadata of all registered bricks in registration order."""
        return [registered.metadata for registered in self._bricks.values()]

    def create(self, identifier: str) -> Brick:
        """Instantiate the brick registered under the identifier."""
        return self.get_invokable(identifier)()

    @property
    def identifiers(self) -> list[str]:
        return list(self._bricks)

    def __contains__(self, value: str | BrickInvokable) -> bool:
        if isinstance(value, type):
            value = value.get_meta().name
        return value in self._bricks

    def __len__(self) -> int:
        return len(self._bricks)


_instance: BrickRegistry | None = None


def get_brick_registry(
    library: Callable[[], Iterable[BrickInvokable]] | None = None,
) -> BrickRegistry:
    """Get the process-wide brick registry, creating it on first access.

    :param library: Provides the bricks registered on creation, defaults to
        the package library. Ignored once the registry exists.
    """
    global _instance
    if _instance is None:
        if library is None:
            from bricks.library import default_bricks as library
        _instance = BrickRegistry(library())
        logger.info(f"Brick registry created with {len(_instance)} bricks")
    return _instance


def reset_brick_registry() -> None:
    """Drop the process-wide registry; the next access creates a new one."""
    global _instance
    _instance = None
