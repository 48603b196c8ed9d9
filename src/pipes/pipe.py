"""
Pipe Orchestration
==================

A pipe is an ordered sequence of bricks. Encoders split the sequence into
content buckets: ``n`` encoders yield ``n + 1`` buckets, bucket ``0`` being
the pipe input and bucket ``n`` the pipe output. A viewer shows the bucket
formed by the encoders placed before it::

    [text] --(base64)--> [bytes] --(reverse)--> [text]
     bucket 0             bucket 1               bucket 2

Propagation
-----------

- A content edit (viewer edit or :meth:`Pipe.set_content`) stores the content
  in its bucket, walks backward through the encoders before it (decoding) and
  forward through the encoders after it (encoding).
- A settings change or a structural change walks forward only, starting at the
  input bucket of the affected position.
- A failing encoder is marked broken and halts the walk in that direction;
  the buckets beyond it keep their last good content.
- Viewers showing outdated content are rendered once the walk ends. The
  viewer that originated an edit already shows its content and is skipped.

Passes run one at a time under a per pipe lock. Every trigger walking the
encoders bumps a generation counter; a pass observing a newer generation
after one of its suspension points stops and discards the result of that
step. The buckets it did not reach are left to the next pass, which walks
them before its own range.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from typing import Any

from loguru import logger
from returns.result import Failure, Success

from bricks.base import Brick
from bricks.encoder import Encoder
from bricks.exceptions import InvalidInputError, UnknownBrickError
from bricks.fields import SettingField
from bricks.models import Direction
from bricks.registry import BrickRegistry, get_brick_registry
from bricks.viewer import Viewer
from container_models import Content
from conversion.byte_encoder import bytes_from_hex_string, hex_string_from_bytes
from conversion.exceptions import ConversionError
from pipes.exceptions import PipeLoadError
from pipes.models import PipeState


class Pipe:
    """
    Ordered bricks sharing content in both directions.

    Bricks added at construction or through :meth:`from_state` are wired but
    not evaluated yet; await :meth:`refresh` to run the initial pass.
    """

    def __init__(self, bricks: Iterable[Brick] = (), content: Content | bytes | str | None = None) -> None:
        self._bricks: list[Brick] = []
        self._contents: list[Content] = [Content.wrap(content) if content is not None else Content()]
        self._pending_bucket: int | None = 0
        self._owed_reverse: int | None = None
        self._generation = 0
        self._lock = asyncio.Lock()
        for brick in bricks:
            self._insert(brick, len(self._bricks))

    # Structure

    @property
    def bricks(self) -> tuple[Brick, ...]:
        return tuple(self._bricks)

    @property
    def encoders(self) -> tuple[Encoder, ...]:
        return tuple(brick for brick in self._bricks if isinstance(brick, Encoder))

    @property
    def viewers(self) -> tuple[Viewer, ...]:
        return tuple(brick for brick in self._bricks if isinstance(brick, Viewer))

    @property
    def contents(self) -> tuple[Content, ...]:
        return tuple(self._contents)

    @property
    def input(self) -> Content:
        return self._contents[0]

    @property
    def output(self) -> Content:
        return self._contents[-1]

    @property
    def generation(self) -> int:
        return self._generation

    def get_content(self, bucket: int) -> Content:
        self._check_bucket(bucket)
        return self._contents[bucket]

    def bucket_of(self, brick: Brick) -> int:
        """
        Bucket a brick reads from.

        For a viewer this is the bucket it shows; for an encoder it is its
        input bucket in the forward direction.
        """
        return self._bucket_at(self._index_of(brick))

    def __len__(self) -> int:
        return len(self._bricks)

    def __contains__(self, brick: object) -> bool:
        return any(brick is candidate for candidate in self._bricks)

    def __repr__(self) -> str:
        return f"<Pipe [{', '.join(brick.name for brick in self._bricks)}]>"

    async def add_brick(self, brick: Brick, index: int | None = None) -> None:
        """
        Insert a brick, appending it when no index is given.

        :raises ValueError: If the brick is already part of the pipe or the index is out of range.
        """
        index = len(self._bricks) if index is None else index
        if not 0 <= index <= len(self._bricks):
            raise ValueError(f"Index {index} is out of range for a pipe of {len(self._bricks)} bricks")
        self._insert(brick, index)
        await self._propagate(self._bucket_at(index))

    async def remove_brick(self, brick: Brick) -> None:
        bucket = self.bucket_of(brick)
        self._remove(brick)
        await self._propagate(bucket)

    async def move_brick(self, brick: Brick, index: int) -> None:
        """Move a brick to the given index, counted after its removal."""
        if not 0 <= index < len(self._bricks):
            raise ValueError(f"Index {index} is out of range for a pipe of {len(self._bricks)} bricks")
        previous_bucket = self.bucket_of(brick)
        self._remove(brick)
        self._insert(brick, index)
        await self._propagate(min(previous_bucket, self.bucket_of(brick)))

    def _insert(self, brick: Brick, index: int) -> None:
        if brick in self:
            raise ValueError(f"Brick '{brick.name}' is already part of this pipe")
        bucket = self._bucket_at(index)
        self._bricks.insert(index, brick)
        brick.on_settings_change(self._brick_setting_did_change)
        match brick:
            case Encoder():
                # Recomputed by the following forward pass
                self._contents.insert(bucket + 1, self._contents[bucket])
                self._shift_owed(bucket, 1)
            case Viewer():
                brick.attach(self._viewer_did_edit)
        logger.debug(f"Inserted brick '{brick.name}' at index {index} (bucket {bucket})")

    def _remove(self, brick: Brick) -> None:
        index = self._index_of(brick)
        bucket = self._bucket_at(index)
        del self._bricks[index]
        brick.off_settings_change(self._brick_setting_did_change)
        match brick:
            case Encoder():
                del self._contents[bucket + 1]
                self._shift_owed(bucket, -1)
            case Viewer():
                brick.detach()
        logger.debug(f"Removed brick '{brick.name}' from index {index}")

    def _index_of(self, brick: Brick) -> int:
        for index, candidate in enumerate(self._bricks):
            if candidate is brick:
                return index
        raise ValueError(f"Brick '{brick.name}' is not part of this pipe")

    def _bucket_at(self, index: int) -> int:
        return sum(isinstance(brick, Encoder) for brick in self._bricks[:index])

    def _check_bucket(self, bucket: int) -> None:
        if not 0 <= bucket < len(self._contents):
            raise ValueError(f"Bucket {bucket} is out of range for a pipe of {len(self._contents)} buckets")

    # Triggers

    async def set_content(self, content: Content | bytes | str, bucket: int = 0) -> None:
        """Store content in a bucket and propagate it in both directions."""
        self._check_bucket(bucket)
        await self._propagate(bucket, content=Content.wrap(content), backward=True)

    async def _viewer_did_edit(self, viewer: Viewer, content: Content) -> None:
        await self._propagate(self.bucket_of(viewer), content=content, backward=True)

    def _brick_setting_did_change(self, brick: Brick, field: SettingField) -> None:
        # Viewers flag themselves for rendering
        if isinstance(brick, Encoder):
            self._schedule(self.bucket_of(brick))

    async def update_setting(self, brick: Brick, name: str, value: Any) -> bool:
        """
        Assign a setting value and run the resulting pass.

        :return: Whether the value changed.
        :raises InvalidInputError: If the value is rejected; the pipe is left untouched.
        """
        changed = brick.set_setting_value(name, value)
        await self.refresh()
        return changed

    async def set_reversed(self, encoder: Encoder, value: bool) -> None:
        """Swap the encode and decode roles of an encoder and run the resulting pass."""
        if encoder.reversed != value:
            encoder.reversed = value
            self._schedule(self.bucket_of(encoder))
        await self.refresh()

    async def refresh(self) -> None:
        """Run the pass for settings changes recorded since the last one, if any."""
        await self._propagate(self._pending_bucket)

    def _schedule(self, bucket: int) -> None:
        if self._pending_bucket is None or bucket < self._pending_bucket:
            self._pending_bucket = bucket

    def _shift_owed(self, bucket: int, offset: int) -> None:
        if self._pending_bucket is not None and self._pending_bucket > bucket:
            self._pending_bucket += offset
        if self._owed_reverse is not None and self._owed_reverse > bucket:
            self._owed_reverse += offset

    # Propagation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _propagate(
        self,
        bucket: int | None,
        *,
        content: Content | None = None,
        backward: bool = False,
    ) -> None:
        """
        Run one pass starting at the given bucket.

        A content pass recomputes every bucket from the stored content. A
        forward only pass first takes over the work left by superseded
        passes and pending settings changes: it finishes an interrupted
        backward walk and starts its forward walk at the lowest bucket owed.

        :param bucket: Bucket to start from, ``None`` only renders viewers.
        :param content: Content to store in the bucket before walking.
        :param backward: Whether to walk backward as well as forward.
        """
        if bucket is not None:
            self._generation += 1
        generation = self._generation

        def is_current() -> bool:
            return self._is_current(generation)

        async with self._lock:
            if bucket is not None:
                if content is not None:
                    self._contents[bucket] = content
                if backward:
                    reverse_from = bucket
                elif self._owed_reverse is not None:
                    # Recorded before a structural change may have shortened the pipe
                    reverse_from = min(self._owed_reverse, len(self._contents) - 1)
                else:
                    reverse_from = None
                if not backward and self._pending_bucket is not None:
                    bucket = min(bucket, self._pending_bucket)
                self._pending_bucket = None
                self._owed_reverse = None
                logger.debug(f"Pass {generation} starting at bucket {bucket}")

                if reverse_from is not None and not await self._walk(reverse_from, Direction.REVERSE, is_current):
                    self._schedule(bucket)
                    return
                if not await self._walk(bucket, Direction.FORWARD, is_current):
                    return
            await self._render_viewers(is_current)

    async def _walk(self, bucket: int, direction: Direction, is_current: Callable[[], bool]) -> bool:
        """
        Walk through the encoders from the given bucket in one direction.

        When superseded, the bucket the walk stopped at is recorded for the
        next pass.

        :return: ``False`` if the pass was superseded, ``True`` otherwise.
        """
        encoders = self.encoders
        if direction is Direction.FORWARD:
            steps = [(index, index + 1) for index in range(bucket, len(encoders))]
        else:
            steps = [(index + 1, index) for index in range(bucket - 1, -1, -1)]

        for source, target in steps:
            encoder = encoders[min(source, target)]
            result = await encoder.transform(self._contents[source], direction)
            if not is_current():
                logger.debug(f"Discarding superseded output of brick '{encoder.name}'")
                if direction is Direction.FORWARD:
                    self._schedule(source)
                else:
                    self._owed_reverse = source
                return False
            match result:
                case Success(output):
                    self._contents[target] = output
                case Failure(error):
                    logger.info(f"Propagation {direction} halted at brick '{encoder.name}': {error}")
                    break
        return True

    async def _render_viewers(self, is_current: Callable[[], bool]) -> None:
        """Render every viewer not showing its bucket content or asking for a render."""
        for index, brick in enumerate(self._bricks):
            if not isinstance(brick, Viewer):
                continue
            content = self._contents[self._bucket_at(index)]
            if brick.content == content and not brick.needs_render:
                continue
            await brick.render(content, is_current=is_current)
            if not is_current():
                return

    # Serialization

    def serialize(self) -> PipeState:
        return PipeState(
            items=[brick.serialize() for brick in self._bricks],
            content=hex_string_from_bytes(self.input.data),
        )

    @classmethod
    def from_state(cls, state: PipeState, registry: BrickRegistry | None = None) -> Pipe:
        """
        Rebuild a pipe from its serialized state.

        All problems are collected before failing, so a single error names
        every unknown brick and every rejected setting.

        :raises PipeLoadError: If any brick or setting could not be restored.
        """
        registry = registry or get_brick_registry()
        bricks: list[Brick] = []
        problems: list[str] = []
        missing: list[str] = []
        for position, item in enumerate(state.items):
            try:
                brick = registry.create(item.brick)
            except UnknownBrickError as error:
                missing.append(item.brick)
                problems.append(str(error))
                continue
            for name, raw in item.settings.items():
                try:
                    brick.apply_setting(name, raw)
                except InvalidInputError as error:
                    problems.append(f"Item {position} ('{item.brick}'): {error}")
            if item.reversed:
                if isinstance(brick, Encoder):
                    brick.reversed = True
                else:
                    problems.append(f"Item {position} ('{item.brick}'): only encoders can be reversed")
            bricks.append(brick)

        content = Content()
        if state.content:
            try:
                content = Content.from_bytes(bytes_from_hex_string(state.content))
            except ConversionError as error:
                problems.append(f"Content: {error}")

        if problems:
            raise PipeLoadError(problems, missing)
        logger.info(f"Loaded pipe with {len(bricks)} bricks")
        return cls(bricks, content)
