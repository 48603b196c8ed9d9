import asyncio

import pytest

from bricks.encoder import Encoder
from bricks.encoders import Base64Encoder, CaesarCipherEncoder, CaseTransformEncoder, ReverseEncoder
from bricks.models import BrickMeta, BrickType
from bricks.viewers import BytesViewer, TextViewer
from container_models import Content
from pipes import Pipe

pytestmark = pytest.mark.anyio


class RecordingViewer(TextViewer):
    """Text viewer remembering every content it rendered."""

    def __init__(self) -> None:
        super().__init__()
        self.rendered: list[Content] = []

    async def perform_view(self, content: Content) -> str:
        self.rendered.append(content)
        return await super().perform_view(content)


class GatedViewer(TextViewer):
    """Text viewer whose rendering waits until the gate opens."""

    def __init__(self) -> None:
        super().__init__()
        self.started = asyncio.Event()
        self.gate = asyncio.Event()

    async def perform_view(self, content: Content) -> str:
        self.started.set()
        await self.gate.wait()
        return await super().perform_view(content)


class GatedEncoder(Encoder):
    """Passes content through unchanged once the gate opens."""

    meta = BrickMeta(name="gated", title="Gated", category="Test", type=BrickType.ENCODER)

    def __init__(self) -> None:
        super().__init__()
        self.started = asyncio.Event()
        self.gate = asyncio.Event()
        self.gate.set()

    async def _pass(self, content: Content) -> Content:
        self.started.set()
        await self.gate.wait()
        return content

    async def perform_encode(self, content: Content) -> Content:
        return await self._pass(content)

    async def perform_decode(self, content: Content) -> Content:
        return await self._pass(content)

    def hold(self) -> None:
        self.started.clear()
        self.gate.clear()


def base64_reversed() -> Base64Encoder:
    encoder = Base64Encoder()
    encoder.reversed = True
    return encoder


class TestBuckets:
    def test_encoders_split_the_pipe_into_buckets(self):
        # Arrange
        first, encoder, second = TextViewer(), ReverseEncoder(), TextViewer()

        # Act
        pipe = Pipe([first, encoder, second], "abc")

        # Assert
        assert len(pipe.contents) == 2  # noqa
        assert pipe.bucket_of(first) == 0
        assert pipe.bucket_of(encoder) == 0
        assert pipe.bucket_of(second) == 1
        assert pipe.viewers == (first, second)
        assert pipe.encoders == (encoder,)

    async def test_refresh_runs_the_initial_pass(self):
        viewer = TextViewer()
        pipe = Pipe([ReverseEncoder(), viewer], "abc")

        await pipe.refresh()

        assert pipe.output == Content.from_text("cba")
        assert viewer.text == "cba"

    def test_empty_pipe(self):
        pipe = Pipe()

        assert pipe.input is pipe.output
        assert pipe.input.is_empty()
        assert repr(pipe) == "<Pipe []>"


class TestContentPropagation:
    async def test_failing_middle_encoder_halts_forward_propagation(self):
        # Arrange
        pipe = Pipe([ReverseEncoder(), base64_reversed(), ReverseEncoder()], b"DIQA")
        await pipe.refresh()
        first, middle, last = pipe.encoders
        assert pipe.output == Content.from_bytes(b"\x03\x02\x01")

        # Act
        await pipe.set_content(b"!!!!")

        # Assert
        assert first.output == Content.from_bytes(b"!!!!")
        assert middle.is_broken
        assert "Forbidden character '!'" in str(middle.error)
        assert not last.is_broken
        assert last.output == Content.from_bytes(b"\x03\x02\x01")
        assert pipe.output == Content.from_bytes(b"\x03\x02\x01")

    async def test_recovering_input_clears_broken_state(self):
        pipe = Pipe([base64_reversed()], b"!!!!")
        await pipe.refresh()
        (encoder,) = pipe.encoders
        assert encoder.is_broken

        await pipe.set_content(b"AQID")

        assert not encoder.is_broken
        assert pipe.output == Content.from_bytes(b"\x01\x02\x03")

    async def test_viewer_edit_propagates_backward(self):
        # Arrange
        source, output = TextViewer(), TextViewer()
        pipe = Pipe([source, Base64Encoder(), output], "hello")
        await pipe.refresh()
        assert output.text == "aGVsbG8="

        # Act
        await output.edit("d29ybGQ=")

        # Assert
        assert pipe.input == Content.from_text("world")
        assert source.text == "world"

    async def test_edit_reproduces_original_bytes(self):
        # Arrange
        viewer = BytesViewer()
        pipe = Pipe([Base64Encoder(), viewer], b"\x00\xff\x10")
        await pipe.refresh()

        # Act
        await viewer.edit(viewer.text)

        # Assert
        assert pipe.input == Content.from_bytes(b"\x00\xff\x10")

    async def test_set_content_in_middle_bucket_walks_both_ways(self):
        pipe = Pipe([ReverseEncoder(), Base64Encoder(), ReverseEncoder()])

        await pipe.set_content("AQID", bucket=2)

        assert pipe.input == Content.from_bytes(b"\x03\x02\x01")
        assert pipe.get_content(1) == Content.from_bytes(b"\x01\x02\x03")
        assert pipe.output == Content.from_text("DIQA")

    async def test_origin_viewer_is_not_rendered_again(self):
        # Arrange
        output = RecordingViewer()
        pipe = Pipe([TextViewer(), Base64Encoder(), output], "hello")
        await pipe.refresh()
        output.rendered.clear()

        # Act
        await output.edit("d29ybGQ=")

        # Assert
        assert not output.rendered
        assert output.text == "d29ybGQ="

    async def test_unchanged_viewers_are_not_rendered_again(self):
        viewer = RecordingViewer()
        pipe = Pipe([viewer, ReverseEncoder()], "abc")
        await pipe.refresh()

        await pipe.set_content("abc")

        assert viewer.rendered == [Content.from_text("abc")]

    async def test_invalid_edit_does_not_propagate(self):
        viewer = BytesViewer()
        pipe = Pipe([ReverseEncoder(), viewer], "abc")
        await pipe.refresh()
        generation = pipe.generation

        await viewer.edit("xyz")

        assert viewer.is_broken
        assert pipe.generation == generation
        assert pipe.input == Content.from_text("abc")

    async def test_set_content_rejects_unknown_bucket(self):
        with pytest.raises(ValueError, match="Bucket 2 is out of range"):
            await Pipe([ReverseEncoder()]).set_content("x", bucket=2)


class TestSupersession:
    async def test_superseded_render_is_discarded(self):
        # Arrange
        viewer = GatedViewer()
        pipe = Pipe([viewer])

        # Act
        first = asyncio.create_task(pipe.set_content("first"))
        await viewer.started.wait()
        second = asyncio.create_task(pipe.set_content("second"))
        await asyncio.sleep(0)
        viewer.gate.set()
        await asyncio.gather(first, second)

        # Assert
        assert viewer.text == "second"
        assert viewer.content == Content.from_text("second")
        assert pipe.generation == 2  # noqa

    async def test_superseded_forward_walk_is_finished_by_the_next_pass(self):
        # Arrange
        first, gated, last = CaesarCipherEncoder(), GatedEncoder(), CaesarCipherEncoder()
        pipe = Pipe([first, gated, ReverseEncoder(), last], "abc")
        await pipe.refresh()
        assert pipe.output == Content.from_text("qpo")
        gated.hold()

        # Act
        early = asyncio.create_task(pipe.update_setting(first, "shift", 1))
        await gated.started.wait()
        late = asyncio.create_task(pipe.update_setting(last, "shift", 2))
        await asyncio.sleep(0)
        gated.gate.set()
        await asyncio.gather(early, late)

        # Assert
        assert pipe.contents == tuple(Content.from_text(text) for text in ("abc", "bcd", "bcd", "dcb", "fed"))

    async def test_superseded_backward_walk_is_finished_by_the_next_pass(self):
        # Arrange
        first, gated, second, output = CaesarCipherEncoder(), GatedEncoder(), CaesarCipherEncoder(), TextViewer()
        pipe = Pipe([first, gated, second, output], "abc")
        await pipe.refresh()
        assert output.text == "opq"
        gated.hold()

        # Act
        edit = asyncio.create_task(output.edit("xyz"))
        await gated.started.wait()
        change = asyncio.create_task(pipe.update_setting(second, "shift", 1))
        await asyncio.sleep(0)
        gated.gate.set()
        await asyncio.gather(edit, change)

        # Assert
        assert pipe.input == Content.from_text("jkl")
        assert pipe.get_content(1) == Content.from_text("qrs")
        assert pipe.get_content(2) == Content.from_text("qrs")
        assert pipe.output == Content.from_text("rst")
        assert output.text == "rst"

    async def test_generation_counts_passes_walking_encoders(self):
        viewer = TextViewer()
        pipe = Pipe([viewer, ReverseEncoder()])
        await pipe.refresh()

        await pipe.update_setting(viewer, "encoding", "latin-1")
        await pipe.set_content("x")

        assert pipe.generation == 2  # noqa


class TestSettingsPropagation:
    async def test_settings_change_walks_forward_from_encoder(self):
        # Arrange
        source, output = TextViewer(), TextViewer()
        encoder = CaesarCipherEncoder()
        pipe = Pipe([source, encoder, output], "abc")
        await pipe.refresh()
        assert output.text == "hij"

        await output.edit("bcd")
        assert source.text == "uvw"

        # Act
        changed = await pipe.update_setting(encoder, "shift", 1)

        # Assert
        assert changed
        assert source.text == "uvw"
        assert output.text == "vwx"

    async def test_direct_setting_change_waits_for_refresh(self):
        # Arrange
        encoder = CaesarCipherEncoder()
        pipe = Pipe([encoder], "abc")
        await pipe.refresh()

        # Act
        encoder.set_setting_value("shift", 1)
        pending_output = pipe.output
        await pipe.refresh()

        # Assert
        assert pending_output == Content.from_text("hij")
        assert pipe.output == Content.from_text("bcd")

    async def test_refresh_without_changes_does_not_walk(self):
        pipe = Pipe([ReverseEncoder()], "abc")
        await pipe.refresh()

        await pipe.refresh()

        assert pipe.generation == 1

    async def test_viewer_setting_change_only_renders_that_viewer(self):
        # Arrange
        other, viewer = RecordingViewer(), BytesViewer()
        pipe = Pipe([other, ReverseEncoder(), viewer], b"\x01\x02")
        await pipe.refresh()
        other.rendered.clear()
        generation = pipe.generation

        # Act
        await pipe.update_setting(viewer, "format", "binary")

        # Assert
        assert viewer.text == "00000010 00000001"
        assert not other.rendered
        assert pipe.generation == generation

    async def test_set_reversed(self):
        encoder = Base64Encoder()
        pipe = Pipe([encoder], "AQID")
        await pipe.refresh()

        await pipe.set_reversed(encoder, True)

        assert pipe.output == Content.from_bytes(b"\x01\x02\x03")

    async def test_rejected_setting_leaves_pipe_untouched(self):
        encoder = CaesarCipherEncoder()
        pipe = Pipe([encoder], "abc")
        await pipe.refresh()

        with pytest.raises(ValueError):
            await pipe.update_setting(encoder, "shift", 99)

        assert encoder.get_setting_value("shift") == 7  # noqa
        assert pipe.output == Content.from_text("hij")


class TestStructure:
    @pytest.fixture
    def upper(self) -> CaseTransformEncoder:
        encoder = CaseTransformEncoder()
        encoder.set_setting_value("case", "upper")
        return encoder

    async def test_add_remove_and_move_bricks(self, upper: CaseTransformEncoder):
        # Arrange
        source, reverse, output = TextViewer(), ReverseEncoder(), TextViewer()
        pipe = Pipe([source, reverse, output], "abc")
        await pipe.refresh()
        assert output.text == "cba"

        # Act & Assert
        await pipe.add_brick(upper, 2)
        assert output.text == "CBA"
        assert len(pipe.contents) == 3  # noqa

        await pipe.remove_brick(reverse)
        assert output.text == "ABC"
        assert reverse not in pipe

        await pipe.move_brick(upper, 0)
        assert pipe.bricks == (upper, source, output)
        assert source.text == "ABC"
        assert pipe.input == Content.from_text("abc")

    async def test_add_brick_appends_by_default(self):
        viewer = TextViewer()
        pipe = Pipe([ReverseEncoder()], "abc")
        await pipe.refresh()

        await pipe.add_brick(viewer)

        assert pipe.bricks[-1] is viewer
        assert viewer.text == "cba"

    async def test_removed_viewer_is_detached(self):
        viewer = TextViewer()
        pipe = Pipe([viewer, ReverseEncoder()], "abc")
        await pipe.refresh()

        await pipe.remove_brick(viewer)
        await viewer.edit("changed")

        assert pipe.input == Content.from_text("abc")

    async def test_removed_encoder_no_longer_triggers_passes(self):
        encoder = CaesarCipherEncoder()
        pipe = Pipe([encoder], "abc")
        await pipe.refresh()

        await pipe.remove_brick(encoder)
        encoder.set_setting_value("shift", 1)
        await pipe.refresh()

        assert pipe.output == Content.from_text("abc")

    async def test_brick_can_only_be_added_once(self):
        encoder = ReverseEncoder()
        pipe = Pipe([encoder])

        with pytest.raises(ValueError, match="already part of this pipe"):
            await pipe.add_brick(encoder)

    @pytest.mark.parametrize("index", [-1, 3])
    async def test_add_brick_rejects_out_of_range_index(self, index: int):
        pipe = Pipe([ReverseEncoder(), TextViewer()])

        with pytest.raises(ValueError, match="out of range"):
            await pipe.add_brick(TextViewer(), index)

    async def test_unknown_brick(self):
        pipe = Pipe([ReverseEncoder()])

        with pytest.raises(ValueError, match="is not part of this pipe"):
            await pipe.remove_brick(TextViewer())
