from pydantic import Field

from bricks.models import BaseModelConfig, BrickMeta, FieldSchema


class BrickDetail(BaseModelConfig):
    """Brick metadata together with the schema of its settings."""

    meta: BrickMeta
    settings: list[FieldSchema] = Field(default_factory=list, description="Settings fields with their default values")
    reversible: bool | None = Field(
        None,
        description="Whether decoding restores the encoded content, only set for encoders",
    )
