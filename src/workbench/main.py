from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from uvicorn import run

from bricks.registry import get_brick_registry
from workbench.routers import prefix_router
from workbench.settings import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Log the configuration and build the brick registry when the application starts.

    Registry configuration errors (such as duplicate identifiers) surface here,
    at startup, rather than on the first request.

    :param app: The FastAPI application instance.

    :yields: ``None``
    """
    get_settings().log_startup_config()
    get_brick_registry()
    try:
        yield
    finally:
        logger.info("Application shutdown")


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(lifespan=lifespan, title=settings.app_title, version=settings.app_version)
    application.include_router(prefix_router)
    return application


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    logger.info("Starting server...")
    run(app, host=settings.api_host, port=settings.api_port, reload=False, workers=1)
