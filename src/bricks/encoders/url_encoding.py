from urllib.parse import quote_from_bytes, unquote_to_bytes

from bricks.encoder import Encoder
from bricks.models import BrickMeta, BrickType
from container_models import Content


class URLEncoder(Encoder):
    """Percent-encodes every byte outside the unreserved URL characters."""

    meta = BrickMeta(name="url-encoding", title="URL encoding", category="Encoding", type=BrickType.ENCODER)

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "spaces_as_plus",
                "label": "Encode spaces as +",
                "type": "boolean",
                "value": False,
            },
        )

    def perform_encode(self, content: Content) -> Content:
        if self.get_setting_value("spaces_as_plus"):
            return Content.from_text(quote_from_bytes(content.data, safe=" ").replace(" ", "+"))
        return Content.from_text(quote_from_bytes(content.data, safe=""))

    def perform_decode(self, content: Content) -> Content:
        text = content.get_text()
        if self.get_setting_value("spaces_as_plus"):
            text = text.replace("+", " ")
        return Content.from_bytes(unquote_to_bytes(text))
