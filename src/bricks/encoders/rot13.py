from string import ascii_lowercase, ascii_uppercase, digits
from typing import Final

from bricks.encoder import Encoder
from bricks.models import BrickMeta, BrickType
from container_models import Content


def _rotation(alphabet: str, shift: int) -> str:
    return alphabet[shift:] + alphabet[:shift]


_PRINTABLE: Final[str] = "".join(chr(code_point) for code_point in range(33, 127))
_LETTERS: Final[str] = ascii_lowercase + ascii_uppercase
_ROTATED_LETTERS: Final[str] = _rotation(ascii_lowercase, 13) + _rotation(ascii_uppercase, 13)

ROTATION_TABLES: Final[dict[str, dict[int, int]]] = {
    "rot5": str.maketrans(digits, _rotation(digits, 5)),
    "rot13": str.maketrans(_LETTERS, _ROTATED_LETTERS),
    "rot18": str.maketrans(_LETTERS + digits, _ROTATED_LETTERS + _rotation(digits, 5)),
    "rot47": str.maketrans(_PRINTABLE, _rotation(_PRINTABLE, 47)),
}


class ROT13Encoder(Encoder):
    """Rotates letters (and digits or printable ASCII, depending on the variant).

    Every variant is its own inverse.
    """

    meta = BrickMeta(name="rot13", title="ROT13", category="Cipher", type=BrickType.ENCODER)

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "variant",
                "type": "enum",
                "value": "rot13",
                "elements": list(ROTATION_TABLES),
                "labels": ["ROT5 (0-9)", "ROT13 (A-Z, a-z)", "ROT18 (0-9, A-Z, a-z)", "ROT47 (!-~)"],
            },
        )

    def perform_encode(self, content: Content) -> Content:
        table = ROTATION_TABLES[self.get_setting_value("variant")]
        return Content.from_text(content.get_text().translate(table))

    def perform_decode(self, content: Content) -> Content:
        return self.perform_encode(content)
