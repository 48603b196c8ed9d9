from enum import StrEnum, auto
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class BaseModelConfig(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


class BrickType(StrEnum):
    ENCODER = auto()
    VIEWER = auto()


class Direction(StrEnum):
    """Direction of a transform through an encoder (and of propagation through a pipe)."""

    FORWARD = auto()
    REVERSE = auto()

    def flipped(self) -> "Direction":
        return Direction.REVERSE if self is Direction.FORWARD else Direction.FORWARD


type FieldType = Literal["enum", "boolean", "text", "number", "bytes"]


class BrickMeta(BaseModelConfig):
    """Static descriptor of a brick, available without instantiating it."""

    name: str = Field(..., min_length=1, description="Unique brick identifier")
    title: str = Field(..., min_length=1, description="Display title")
    category: str = Field(..., min_length=1)
    type: BrickType


class FieldSchema(BaseModelConfig):
    """External description of a settings field."""

    name: str
    type: FieldType
    value: Any
    label: str
    elements: list[Any] | None = None
    labels: list[str] | None = None
    width: int = Field(12, ge=1, le=12, description="Layout width hint in twelfths")
    randomizable: bool = True


class BrickState(BaseModelConfig):
    """Serialized brick: its identifier and its JSON-safe settings values."""

    brick: str = Field(..., alias="brickIdentifier", min_length=1)
    settings: dict[str, Any] = Field(default_factory=dict, alias="settingsValues")
    reversed: bool = False

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )
