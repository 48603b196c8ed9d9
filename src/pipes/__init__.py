"""
Pipes: ordered bricks kept consistent in both directions.

Quick Start:
    from bricks import get_brick_registry
    from pipes import Pipe

    registry = get_brick_registry()
    viewer, encoder, output = registry.create("text"), registry.create("base64"), registry.create("text")
    pipe = Pipe([viewer, encoder, output], content="hello")
    await pipe.refresh()
    output.text  # 'aGVsbG8='

    await output.edit("d29ybGQ=")
    viewer.text  # 'world'
"""

from pipes.exceptions import PipeLoadError
from pipes.models import PipeState
from pipes.pipe import Pipe

__all__ = [
    "Pipe",
    "PipeLoadError",
    "PipeState",
]
