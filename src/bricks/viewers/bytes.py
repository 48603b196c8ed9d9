import re

from bricks.models import BrickMeta, BrickType
from bricks.viewer import Viewer
from container_models import Content
from conversion.byte_encoder import (
    binary_string_from_bytes,
    bytes_from_binary_string,
    bytes_from_hex_string,
    hex_string_from_bytes,
)
from conversion.utils import chunk

_WHITESPACE = re.compile(r"\s+")

# Bits represented by one character of each format
_CHARACTER_BITS = {"hexadecimal": 4, "binary": 1}


class BytesViewer(Viewer):
    """Viewer brick for viewing and editing bytes as hex or binary digits."""

    meta = BrickMeta(name="bytes", title="Bytes", category="View", type=BrickType.VIEWER)

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "format",
                "type": "enum",
                "width": 6,
                "value": "hexadecimal",
                "elements": ["hexadecimal", "binary"],
                "labels": ["Hexadecimal", "Binary"],
                "randomizable": False,
            },
            {
                "name": "group_bits",
                "label": "Group by",
                "type": "enum",
                "width": 6,
                "value": 8,
                "elements": [None, 4, 8, 16, 32],
                "labels": ["None", "Half-byte", "Byte", "2 Bytes", "4 Bytes"],
                "randomizable": False,
            },
        )

    async def perform_view(self, content: Content) -> str:
        format_ = self.get_setting_value("format")
        if format_ == "hexadecimal":
            string = hex_string_from_bytes(content.data)
        else:
            string = binary_string_from_bytes(content.data)

        group_bits = self.get_setting_value("group_bits")
        if group_bits is not None:
            string = " ".join(chunk(string, group_bits // _CHARACTER_BITS[format_]))
        return string

    def perform_parse(self, text: str) -> Content:
        string = _WHITESPACE.sub("", text)
        if self.get_setting_value("format") == "hexadecimal":
            return Content.from_bytes(bytes_from_hex_string(string))
        return Content.from_bytes(bytes_from_binary_string(string))
