import logging
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from bricks.registry import BrickRegistry, get_brick_registry, reset_brick_registry
from workbench.main import app


class PropagateHandler(logging.Handler):
    """Handler that propagates loguru records to standard logging."""

    def emit(self, record: logging.LogRecord) -> None:
        logging.getLogger(record.name).handle(record)


@pytest.fixture
def caplog(caplog):
    """Fixture to enable caplog to capture loguru logs."""
    handler_id = logger.add(PropagateHandler(), format="{message}")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def registry() -> Iterator[BrickRegistry]:
    """Provide a freshly built process-wide registry, dropped again afterwards."""
    reset_brick_registry()
    yield get_brick_registry()
    reset_brick_registry()


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c
