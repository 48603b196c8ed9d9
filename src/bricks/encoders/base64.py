from bricks.encoder import Encoder
from bricks.models import BrickMeta, BrickType
from container_models import Content
from conversion.byte_encoder import base64_string_from_bytes, bytes_from_base64_string
from conversion.variants import BASE64_VARIANTS


class Base64Encoder(Encoder):
    """Encodes bytes using one of the base64 variants."""

    meta = BrickMeta(name="base64", title="Base64", category="Encoding", type=BrickType.ENCODER)

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "variant",
                "type": "enum",
                "value": "base64",
                "elements": list(BASE64_VARIANTS),
                "labels": [variant.label for variant in BASE64_VARIANTS.values()],
                "randomizable": False,
            },
        )

    def perform_encode(self, content: Content) -> Content:
        return Content.from_text(base64_string_from_bytes(content.data, self.get_setting_value("variant")))

    def perform_decode(self, content: Content) -> Content:
        return Content.from_bytes(bytes_from_base64_string(content.get_text(), self.get_setting_value("variant")))
