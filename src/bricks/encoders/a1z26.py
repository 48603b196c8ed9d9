import re
from string import ascii_lowercase

from bricks.encoder import Encoder
from bricks.exceptions import TransformError
from bricks.models import BrickMeta, BrickType
from container_models import Content

_WORD = re.compile(r"[a-z]+")


class A1Z26Encoder(Encoder):
    """Replaces each letter by its position in the alphabet.

    Letter case and characters other than a-z are not kept.
    """

    meta = BrickMeta(name="a1z26", title="A1Z26", category="Cipher", type=BrickType.ENCODER)
    reversible = False

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "separator",
                "label": "Letter separator",
                "type": "text",
                "value": " ",
                "min_length": 1,
                "randomizable": False,
                "width": 6,
            },
            {
                "name": "word_separator",
                "label": "Word separator",
                "type": "text",
                "value": " - ",
                "min_length": 1,
                "randomizable": False,
                "width": 6,
            },
        )

    def perform_encode(self, content: Content) -> Content:
        separator = self.get_setting_value("separator")
        words = _WORD.findall(content.get_text().lower())
        encoded = (separator.join(str(ascii_lowercase.index(letter) + 1) for letter in word) for word in words)
        return Content.from_text(self.get_setting_value("word_separator").join(encoded))

    def perform_decode(self, content: Content) -> Content:
        separator = self.get_setting_value("separator")
        words = []
        for word in content.get_text().split(self.get_setting_value("word_separator")):
            letters = []
            for number in word.split(separator):
                if not (number := number.strip()):
                    continue
                if not number.isdecimal() or not 1 <= int(number) <= 26:
                    raise TransformError(f"'{number}' is not a letter position between 1 and 26")
                letters.append(ascii_lowercase[int(number) - 1])
            if letters:
                words.append("".join(letters))
        return Content.from_text(" ".join(words))
