import re

from bricks.encoder import Encoder
from bricks.models import BrickMeta, BrickType
from container_models import Content

_WORD_START = re.compile(r"(^|\s)(\S)")


def _capitalize(text: str) -> str:
    return _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), text.lower())


def _alternate(text: str) -> str:
    characters = []
    upper = False
    for character in text:
        if character.isalpha():
            character = character.upper() if upper else character.lower()
            upper = not upper
        characters.append(character)
    return "".join(characters)


CASE_TRANSFORMS = {
    "lower": str.lower,
    "upper": str.upper,
    "capitalize": _capitalize,
    "alternating": _alternate,
    "inverse": str.swapcase,
}


class CaseTransformEncoder(Encoder):
    """Changes the letter case of the text, the same way in both directions."""

    meta = BrickMeta(name="case-transform", title="Case transform", category="Transform", type=BrickType.ENCODER)
    reversible = False

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "case",
                "type": "enum",
                "value": "lower",
                "elements": list(CASE_TRANSFORMS),
                "labels": ["Lower case", "Upper case", "Capitalize", "Alternating case", "Inverse case"],
            },
        )

    def perform_encode(self, content: Content) -> Content:
        transform = CASE_TRANSFORMS[self.get_setting_value("case")]
        return Content.from_text(transform(content.get_text()))

    def perform_decode(self, content: Content) -> Content:
        return self.perform_encode(content)
