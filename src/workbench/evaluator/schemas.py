from __future__ import annotations

from enum import StrEnum, auto

from pydantic import Field

from bricks.models import BaseModelConfig, BrickType
from pipes.models import PipeState


class InputFormat(StrEnum):
    TEXT = auto()
    HEX = auto()


class EvaluatePipe(BaseModelConfig):
    """Request body: a serialized pipe and an optional input replacing its content."""

    pipe: PipeState
    input: str | None = Field(
        None,
        description="Pipe input, the serialized pipe content is used when omitted",
        examples=["The quick brown fox"],
    )
    input_format: InputFormat = Field(
        InputFormat.TEXT,
        description="Text is encoded with the configured default text encoding",
    )


class BucketContent(BaseModelConfig):
    index: int = Field(..., ge=0)
    size: int = Field(..., ge=0, description="Content size in bytes")
    hex: str
    text: str = Field(..., description="Lenient text preview, malformed sequences replaced")


class BrickStatus(BaseModelConfig):
    name: str
    type: BrickType
    bucket: int = Field(..., ge=0, description="Bucket shown by a viewer, input bucket of an encoder")
    broken: bool
    error: str | None = None
    text: str | None = Field(None, description="Visible text, only set for viewers")


class EvaluationResponse(BaseModelConfig):
    """Every bucket, every brick status and the serialized pipe after evaluation."""

    buckets: list[BucketContent]
    bricks: list[BrickStatus]
    pipe: PipeState
