from http import HTTPStatus
from typing import Any

from fastapi import APIRouter, HTTPException
from loguru import logger

from bricks.encoder import Encoder
from bricks.exceptions import UnknownBrickError
from bricks.models import BrickMeta
from conversion.variants import BASE64_VARIANTS
from workbench.constants import CodecEndpoint, LibraryEndpoint, RoutePrefix
from workbench.dependencies import RegistryDep

from .schemas import BrickDetail

library_route = APIRouter(prefix=f"/{RoutePrefix.BRICKS}", tags=[RoutePrefix.BRICKS])
codecs_route = APIRouter(prefix=f"/{RoutePrefix.CODECS}", tags=[RoutePrefix.CODECS])


@library_route.get(
    path=LibraryEndpoint.ROOT,
    summary="List the available bricks.",
    description="""Lists the metadata of every registered brick, in registration order.""",
)
async def list_bricks(registry: RegistryDep) -> list[BrickMeta]:
    return registry.get_library()


@library_route.get(
    path=LibraryEndpoint.BRICK,
    summary="Describe a brick and its settings.",
    description="""
    Returns the metadata of a registered brick together with the schema of its settings fields,
    holding the default value of every field.
    """,
    responses={
        HTTPStatus.NOT_FOUND: {"description": "Brick not registered"},
    },
)
async def get_brick(name: str, registry: RegistryDep) -> BrickDetail:
    """
    Describe a registered brick.

    :param name: Brick identifier.
    :param registry: Brick registry dependency.
    :return: Brick metadata and settings schema.
    :raises HTTPException: 404 if the identifier is not registered.
    """
    try:
        brick = registry.create(name)
    except UnknownBrickError as error:
        logger.error(str(error))
        raise HTTPException(HTTPStatus.NOT_FOUND, str(error)) from error

    return BrickDetail(
        meta=brick.meta,
        settings=[field.describe() for field in brick.settings],
        reversible=brick.reversible if isinstance(brick, Encoder) else None,
    )


@codecs_route.get(
    path=CodecEndpoint.BASE64_VARIANTS,
    summary="List the base64 variants.",
    description="""Returns the descriptor of every base64 variant, keyed by variant name.""",
)
async def list_base64_variants() -> dict[str, dict[str, Any]]:
    return {name: variant.describe() for name, variant in BASE64_VARIANTS.items()}
