"""
Brick system: configurable pipe stages and their registry.

Bricks are encoders (content to content, both directions) or viewers
(content to and from a visible text). Every brick owns typed settings fields
and a broken state holding the last error.

Quick Start:
    from bricks import get_brick_registry
    from bricks.models import Direction
    from container_models import Content

    registry = get_brick_registry()
    encoder = registry.create("base64")
    encoder.set_setting_value("variant", "base64url")

    result = await encoder.transform(Content.from_text("hello"), Direction.FORWARD)
    # Success(Content(data=b'aGVsbG8'))
"""

from bricks.base import Brick
from bricks.encoder import Encoder
from bricks.exceptions import (
    BrickAlreadyRegisteredError,
    ConfigurationError,
    InvalidInputError,
    TransformError,
    UnknownBrickError,
)
from bricks.models import BrickMeta, BrickState, BrickType, Direction
from bricks.registry import BrickRegistry, get_brick_registry, reset_brick_registry
from bricks.viewer import Viewer

__all__ = [
    "Brick",
    "BrickMeta",
    "BrickRegistry",
    "BrickState",
    "BrickType",
    "Direction",
    "Encoder",
    "Viewer",
    "get_brick_registry",
    "reset_brick_registry",
    # Exceptions
    "BrickAlreadyRegisteredError",
    "ConfigurationError",
    "InvalidInputError",
    "TransformError",
    "UnknownBrickError",
]
