from typing import Final

from bricks.encoder import Encoder
from bricks.exceptions import TransformError
from bricks.models import BrickMeta, BrickType
from container_models import Content

NUMBER_FORMATS: Final[dict[str, tuple[str, int]]] = {
    "decimal": ("d", 10),
    "hexadecimal": ("x", 16),
    "octal": ("o", 8),
    "binary": ("b", 2),
}


class UnicodeCodePointsEncoder(Encoder):
    """Writes each character as its Unicode code point number."""

    meta = BrickMeta(
        name="unicode-code-points", title="Unicode code points", category="Encoding", type=BrickType.ENCODER
    )

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "format",
                "type": "enum",
                "value": "hexadecimal",
                "elements": list(NUMBER_FORMATS),
                "labels": ["Decimal", "Hexadecimal", "Octal", "Binary"],
                "width": 6,
            },
            {
                "name": "separator",
                "type": "text",
                "value": " ",
                "min_length": 1,
                "randomizable": False,
                "width": 6,
            },
        )

    def perform_encode(self, content: Content) -> Content:
        spec, _ = NUMBER_FORMATS[self.get_setting_value("format")]
        separator = self.get_setting_value("separator")
        return Content.from_text(separator.join(format(code_point, spec) for code_point in content.get_code_points()))

    def perform_decode(self, content: Content) -> Content:
        _, base = NUMBER_FORMATS[self.get_setting_value("format")]
        code_points = []
        for number in content.get_text().split(self.get_setting_value("separator")):
            if not (number := number.strip()):
                continue
            try:
                code_points.append(int(number, base))
            except ValueError:
                raise TransformError(f"'{number}' is not a {self.get_setting_value('format')} code point") from None
        return Content.from_code_points(code_points)
