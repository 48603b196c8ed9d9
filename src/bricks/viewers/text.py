from bricks.models import BrickMeta, BrickType
from bricks.viewer import Viewer
from container_models import Content
from conversion.text_encoder import DEFAULT_TEXT_ENCODING, TEXT_ENCODINGS


class TextViewer(Viewer):
    """Viewer brick for viewing and editing text.

    Malformed byte sequences are shown as replacement characters.
    """

    meta = BrickMeta(name="text", title="Text", category="View", type=BrickType.VIEWER)

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "encoding",
                "type": "enum",
                "value": DEFAULT_TEXT_ENCODING,
                "elements": list(TEXT_ENCODINGS),
                "labels": ["UTF-8", "UTF-16LE", "UTF-16BE", "UTF-32LE", "UTF-32BE", "Latin-1", "ASCII"],
                "randomizable": False,
            },
        )

    async def perform_view(self, content: Content) -> str:
        return content.get_text(self.get_setting_value("encoding"), lenient=True)

    def perform_parse(self, text: str) -> Content:
        return Content.from_text(text, self.get_setting_value("encoding"))
