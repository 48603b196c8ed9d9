from typing import Annotated

from fastapi import Depends

from bricks.registry import BrickRegistry, get_brick_registry


def get_registry() -> BrickRegistry:
    """Get the process-wide brick registry."""
    return get_brick_registry()


RegistryDep = Annotated[BrickRegistry, Depends(get_registry)]
