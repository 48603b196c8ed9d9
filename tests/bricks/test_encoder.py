import logging

import pytest
from returns.pipeline import is_successful
from returns.result import Success

from bricks.encoder import Encoder
from bricks.encoders import Base64Encoder, HashEncoder, ReverseEncoder
from bricks.exceptions import ConfigurationError, InvalidInputError, TransformError
from bricks.models import BrickMeta, BrickState, BrickType, Direction
from container_models import Content
from conversion.exceptions import ByteEncodingError

pytestmark = pytest.mark.anyio


class CountingEncoder(Encoder):
    """Upper cases text, counting how often it actually runs."""

    meta = BrickMeta(name="counting", title="Counting", category="Test", type=BrickType.ENCODER)

    def __init__(self) -> None:
        super().__init__()
        self.calls = 0
        self.add_settings({"name": "suffix", "type": "text", "value": ""})

    def perform_encode(self, content: Content) -> Content:
        self.calls += 1
        return Content.from_text(content.get_text().upper() + self.get_setting_value("suffix"))

    def perform_decode(self, content: Content) -> Content:
        self.calls += 1
        return Content.from_text(content.get_text().lower())


class TestTransform:
    async def test_forward_encodes_and_reverse_decodes(self):
        # Arrange
        encoder = Base64Encoder()

        # Act
        encoded = await encoder.transform(Content.from_bytes(bytes([1, 2, 3])), Direction.FORWARD)
        decoded = await encoder.transform(Content.from_text("AQID"), Direction.REVERSE)

        # Assert
        assert encoded == Success(Content.from_text("AQID"))
        assert decoded == Success(Content.from_bytes(bytes([1, 2, 3])))

    @pytest.mark.parametrize(
        "direction, expected",
        [
            pytest.param(Direction.FORWARD, b"\x01\x02\x03", id="forward-decodes"),
            pytest.param(Direction.REVERSE, b"AQID", id="reverse-encodes"),
        ],
    )
    async def test_reversed_swaps_roles(self, direction: Direction, expected: bytes):
        # Arrange
        encoder = Base64Encoder()
        encoder.reversed = True
        source = Content.from_text("AQID") if direction is Direction.FORWARD else Content.from_bytes(b"\x01\x02\x03")

        # Act
        result = await encoder.transform(source, direction)

        # Assert
        assert result.unwrap().data == expected

    async def test_failure_marks_broken_and_keeps_last_output(self):
        # Arrange
        encoder = Base64Encoder()
        good = (await encoder.transform(Content.from_text("AQID"), Direction.REVERSE)).unwrap()

        # Act
        result = await encoder.transform(Content.from_text("!!!!"), Direction.REVERSE)

        # Assert
        assert not is_successful(result)
        error = result.failure()
        assert isinstance(error, TransformError)
        assert isinstance(error.__cause__, ByteEncodingError)
        assert encoder.is_broken
        assert encoder.error is error
        assert encoder.output == good

    async def test_success_clears_broken_state(self):
        encoder = Base64Encoder()
        await encoder.transform(Content.from_text("!!!!"), Direction.REVERSE)

        await encoder.transform(Content.from_text("AQID"), Direction.REVERSE)

        assert not encoder.is_broken
        assert encoder.error is None

    async def test_cached_input_after_failure_clears_broken_state(self):
        # Arrange
        encoder = Base64Encoder()
        encoder.reversed = True
        await encoder.transform(Content.from_text("AQID"))
        await encoder.transform(Content.from_text("A"))
        assert encoder.is_broken

        # Act
        result = await encoder.transform(Content.from_text("AQID"))

        # Assert
        assert result.unwrap() == Content.from_bytes(b"\x01\x02\x03")
        assert not encoder.is_broken
        assert encoder.error is None

    async def test_encode_only_brick_fails_to_decode(self):
        result = await HashEncoder().transform(Content.from_text("x"), Direction.REVERSE)

        assert str(result.failure()) == "Brick 'hash' cannot decode content"

    async def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.DEBUG):
            await Base64Encoder().transform(Content.from_text("!!!!"), Direction.REVERSE)

        assert "Encoder transform failed" in caplog.text
        assert "Forbidden character '!' at index 0" in caplog.text

    async def test_unexpected_errors_propagate(self, monkeypatch: pytest.MonkeyPatch):
        # Arrange
        encoder = ReverseEncoder()

        def explode(_):
            raise RuntimeError("bug")

        monkeypatch.setattr(encoder, "perform_encode", explode)

        # Act & Assert
        with pytest.raises(RuntimeError, match="bug"):
            await encoder.transform(Content.from_text("x"))


class TestCache:
    async def test_same_input_is_served_from_cache(self):
        # Arrange
        encoder = CountingEncoder()
        content = Content.from_text("abc")

        # Act
        await encoder.transform(content)
        result = await encoder.transform(Content.from_text("abc"))

        # Assert
        assert result.unwrap() == Content.from_text("ABC")
        assert encoder.calls == 1

    @pytest.mark.parametrize(
        "change",
        [
            pytest.param(lambda encoder: encoder.set_setting_value("suffix", "!"), id="setting"),
            pytest.param(lambda encoder: setattr(encoder, "reversed", True), id="reversed"),
        ],
    )
    async def test_cache_is_invalidated(self, change):
        encoder = CountingEncoder()
        await encoder.transform(Content.from_text("abc"))

        change(encoder)
        await encoder.transform(Content.from_text("abc"))

        assert encoder.calls == 2  # noqa

    async def test_direction_is_part_of_the_key(self):
        encoder = CountingEncoder()
        await encoder.transform(Content.from_text("abc"), Direction.FORWARD)

        result = await encoder.transform(Content.from_text("abc"), Direction.REVERSE)

        assert result.unwrap() == Content.from_text("abc")
        assert encoder.calls == 2  # noqa


class TestSettings:
    def test_unknown_setting(self):
        with pytest.raises(InvalidInputError, match="brick 'counting' has no such setting"):
            CountingEncoder().get_setting("prefix")

    def test_duplicate_setting_name(self):
        encoder = CountingEncoder()

        with pytest.raises(ConfigurationError, match="Setting 'suffix' is already defined"):
            encoder.add_settings({"name": "suffix", "type": "boolean", "value": False})

    def test_listeners_receive_brick_and_field(self):
        # Arrange
        encoder = CountingEncoder()
        changes = []
        encoder.on_settings_change(lambda brick, field: changes.append((brick, field.name, field.value)))

        # Act
        encoder.set_setting_value("suffix", "?")

        # Assert
        assert changes == [(encoder, "suffix", "?")]

    def test_removed_listener_is_not_notified(self):
        encoder = CountingEncoder()
        changes = []
        listener = lambda brick, field: changes.append(field.name)  # noqa: E731
        encoder.on_settings_change(listener)

        encoder.off_settings_change(listener)
        encoder.set_setting_value("suffix", "?")

        assert not changes

    def test_serialize_includes_reversed_flag(self):
        # Arrange
        encoder = Base64Encoder()
        encoder.reversed = True
        encoder.set_setting_value("variant", "base64url")

        # Act
        state = encoder.serialize()

        # Assert
        assert state == BrickState(brick="base64", settings={"variant": "base64url"}, reversed=True)
        assert state.model_dump(by_alias=True) == {
            "brickIdentifier": "base64",
            "settingsValues": {"variant": "base64url"},
            "reversed": True,
        }

    def test_apply_settings_rejects_invalid_value(self):
        encoder = Base64Encoder()

        with pytest.raises(InvalidInputError):
            encoder.apply_settings({"variant": "base32"})

        assert encoder.get_setting_value("variant") == "base64"

    def test_repr_shows_status(self):
        assert repr(ReverseEncoder()) == "<ReverseEncoder 'reverse' (ok)>"
