from http import HTTPStatus

from fastapi import APIRouter, HTTPException
from loguru import logger

from bricks.viewer import Viewer
from container_models import Content
from conversion.byte_encoder import bytes_from_hex_string, hex_string_from_bytes
from conversion.exceptions import ConversionError
from pipes import Pipe, PipeLoadError
from workbench.constants import EvaluatorEndpoint, RoutePrefix
from workbench.dependencies import RegistryDep
from workbench.settings import Settings, SettingsDep

from .schemas import BrickStatus, BucketContent, EvaluatePipe, EvaluationResponse, InputFormat

evaluator_route = APIRouter(prefix=f"/{RoutePrefix.PIPES}", tags=[RoutePrefix.PIPES])


def _read_input(request: EvaluatePipe, settings: Settings) -> Content | None:
    if request.input is None:
        return None
    try:
        match request.input_format:
            case InputFormat.HEX:
                return Content.from_bytes(bytes_from_hex_string(request.input))
            case InputFormat.TEXT:
                return Content.from_text(request.input, settings.default_text_encoding)
    except ConversionError as error:
        raise HTTPException(HTTPStatus.UNPROCESSABLE_ENTITY, f"Invalid input: {error}") from error


def _describe(pipe: Pipe, settings: Settings) -> EvaluationResponse:
    return EvaluationResponse(
        buckets=[
            BucketContent(
                index=index,
                size=len(content),
                hex=hex_string_from_bytes(content.data),
                text=content.get_text(settings.default_text_encoding, lenient=True),
            )
            for index, content in enumerate(pipe.contents)
        ],
        bricks=[
            BrickStatus(
                name=brick.name,
                type=brick.type,
                bucket=pipe.bucket_of(brick),
                broken=brick.is_broken,
                error=str(brick.error) if brick.error else None,
                text=brick.text if isinstance(brick, Viewer) else None,
            )
            for brick in pipe.bricks
        ],
        pipe=pipe.serialize(),
    )


@evaluator_route.post(
    path=EvaluatorEndpoint.EVALUATE,
    summary="Evaluate a serialized pipe.",
    description="""
    Loads a serialized pipe, optionally replaces its input (as text or hex) and propagates it
    through every brick. Returns the content of every bucket, the status of every brick and
    the visible text of every viewer.

    A failing brick does not fail the request: it is reported as broken and the buckets after it
    keep their previous content.
    """,
    responses={
        HTTPStatus.REQUEST_ENTITY_TOO_LARGE: {"description": "Input exceeds the configured content size"},
        HTTPStatus.UNPROCESSABLE_ENTITY: {"description": "Unknown bricks, invalid settings or malformed input"},
    },
)
async def evaluate_pipe(request: EvaluatePipe, settings: SettingsDep, registry: RegistryDep) -> EvaluationResponse:
    """
    Evaluate a serialized pipe.

    :param request: Serialized pipe and optional input.
    :param settings: Application settings dependency.
    :param registry: Brick registry dependency.
    :return: Buckets, brick statuses and the serialized pipe after evaluation.
    :raises HTTPException: 422 if the pipe cannot be loaded or the input is malformed,
        413 if the input exceeds the configured content size.
    """
    try:
        pipe = Pipe.from_state(request.pipe, registry)
    except PipeLoadError as error:
        logger.error(str(error))
        raise HTTPException(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            {"message": str(error), "problems": error.problems, "missingIdentifiers": error.missing_identifiers},
        ) from error

    content = _read_input(request, settings)
    size = len(content) if content is not None else len(pipe.input)
    if size > settings.max_content_size:
        raise HTTPException(
            HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            f"Input of {size} bytes exceeds the maximum of {settings.max_content_size} bytes",
        )

    if content is not None:
        await pipe.set_content(content)
    else:
        await pipe.refresh()

    logger.info(f"Evaluated pipe with {len(pipe)} bricks")
    return _describe(pipe, settings)
