from __future__ import annotations

from abc import abstractmethod
from collections.abc import Awaitable, Callable
from inspect import isawaitable

from loguru import logger
from returns.result import Failure, ResultE, Success, safe

from bricks.base import Brick
from bricks.exceptions import InvalidInputError, TransformError
from bricks.fields import SettingField
from container_models import Content
from conversion.exceptions import ConversionError
from utils.logger import FailureLevel, log_railway_function

type ContentDelegate = Callable[[Viewer, Content], Awaitable[None]]

_VIEW_ERRORS = (ConversionError, TransformError, InvalidInputError)


def _always_current() -> bool:
    return True


class Viewer(Brick):
    """
    Brick bridging content to and from a visible text.

    :meth:`render` builds the visible text from content, :meth:`edit` turns an
    edited text back into content and hands it to the delegate (the pipe).
    """

    def __init__(self) -> None:
        super().__init__()
        self._content: Content | None = None
        self._text = ""
        self._delegate: ContentDelegate | None = None
        self._needs_render = False

    @property
    def content(self) -> Content | None:
        """Content currently shown."""
        return self._content

    @property
    def text(self) -> str:
        """Visible text."""
        return self._text

    @property
    def needs_render(self) -> bool:
        return self._needs_render

    def attach(self, delegate: ContentDelegate) -> None:
        self._delegate = delegate

    def detach(self) -> None:
        self._delegate = None

    def settings_did_change(self, field: SettingField) -> None:
        self._needs_render = True

    async def render(self, content: Content, *, is_current: Callable[[], bool] = _always_current) -> bool:
        """
        Show the given content.

        Rendering the same content twice produces the same visible text.

        :param content: Content to show.
        :param is_current: Called once the text is built; if it returns ``False``
            the render was superseded and its result is discarded.
        :return: Whether the visible state was updated.
        """
        try:
            text = self.perform_view(content)
            if isawaitable(text):
                text = await text
        except _VIEW_ERRORS as error:
            result: ResultE[str] = Failure(error)
        else:
            result = Success(text)

        if not is_current():
            logger.debug(f"Discarding superseded render of viewer '{self.name}'")
            return False

        self._content = content
        self._needs_render = False
        match result:
            case Success(text):
                self._text = text
                self.mark_ok()
                return True
            case Failure(error):
                self.mark_broken(error)
        return False

    @log_railway_function("Viewer could not read edited text", failure_level=FailureLevel.WARNING)
    async def edit(self, text: str) -> ResultE[Content]:
        """
        Apply a text edit made in the visible representation.

        On success the resulting content is handed to the delegate; on failure
        the viewer is marked broken and nothing propagates.
        """
        self._text = text
        result = self._parse(text)
        match result:
            case Success(content):
                self._content = content
                self.mark_ok()
                if self._delegate is not None:
                    await self._delegate(self, content)
            case Failure(error):
                self.mark_broken(error)
        return result

    @safe(_VIEW_ERRORS)
    def _parse(self, text: str) -> Content:
        return self.perform_parse(text)

    @abstractmethod
    def perform_view(self, content: Content) -> str | Awaitable[str]:
        """Build the visible text for the given content."""

    @abstractmethod
    def perform_parse(self, text: str) -> Content:
        """Build content from an edited visible text."""
