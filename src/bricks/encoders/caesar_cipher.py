from bricks.encoder import Encoder
from bricks.models import BrickMeta, BrickType
from container_models import Content


class CaesarCipherEncoder(Encoder):
    """Shifts each alphabet character by a fixed number of positions."""

    meta = BrickMeta(name="caesar-cipher", title="Caesar cipher", category="Cipher", type=BrickType.ENCODER)

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "shift",
                "type": "number",
                "value": 7,
                "minimum": -25,
                "maximum": 25,
                "width": 6,
            },
            {
                "name": "alphabet",
                "type": "text",
                "value": "abcdefghijklmnopqrstuvwxyz",
                "min_length": 2,
                "unique_characters": True,
                "randomizable": False,
                "width": 6,
            },
            {
                "name": "case_sensitive",
                "label": "Case sensitive",
                "type": "boolean",
                "value": False,
                "randomizable": False,
                "width": 6,
            },
            {
                "name": "include_foreign_characters",
                "label": "Foreign characters",
                "type": "boolean",
                "value": True,
                "randomizable": False,
                "width": 6,
            },
        )

    def _shift(self, content: Content, shift: int) -> Content:
        alphabet: str = self.get_setting_value("alphabet")
        case_sensitive: bool = self.get_setting_value("case_sensitive")
        include_foreign: bool = self.get_setting_value("include_foreign_characters")
        if not case_sensitive:
            # Letters differing only in case collapse onto their first position
            alphabet = "".join(dict.fromkeys(alphabet.lower()))

        characters = []
        for character in content.get_text():
            lookup = character if case_sensitive else character.lower()
            index = alphabet.find(lookup)
            if index == -1:
                if include_foreign:
                    characters.append(character)
                continue
            shifted = alphabet[(index + shift) % len(alphabet)]
            if not case_sensitive and character != lookup:
                shifted = shifted.upper()
            characters.append(shifted)
        return Content.from_text("".join(characters))

    def perform_encode(self, content: Content) -> Content:
        return self._shift(content, self.get_setting_value("shift"))

    def perform_decode(self, content: Content) -> Content:
        return self._shift(content, -self.get_setting_value("shift"))
