from pydantic import BaseModel, ConfigDict, Field

from bricks.models import BrickState


class PipeState(BaseModel):
    """Serialized pipe, used to persist and share pipes.

    Example::

        {
            "items": [
                {"brickIdentifier": "text", "settingsValues": {"encoding": "utf-8"}},
                {"brickIdentifier": "base64", "settingsValues": {"variant": "base64"}},
                {"brickIdentifier": "bytes", "settingsValues": {"format": "hexadecimal", "group_bits": 8}}
            ],
            "content": "68656c6c6f"
        }
    """

    items: list[BrickState] = Field(default_factory=list)
    content: str | None = Field(None, description="Hex encoded pipe input")

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
