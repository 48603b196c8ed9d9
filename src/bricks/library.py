"""Bricks shipped with the package, in library order."""

from bricks.base import Brick
from bricks.encoders import (
    A1Z26Encoder,
    Base64Encoder,
    CaesarCipherEncoder,
    CaseTransformEncoder,
    HashEncoder,
    ReverseEncoder,
    ROT13Encoder,
    UnicodeCodePointsEncoder,
    URLEncoder,
)
from bricks.viewers import BytesViewer, TextViewer


def default_bricks() -> list[type[Brick]]:
    return [
        TextViewer,
        BytesViewer,
        ReverseEncoder,
        CaseTransformEncoder,
        CaesarCipherEncoder,
        ROT13Encoder,
        A1Z26Encoder,
        Base64Encoder,
        URLEncoder,
        UnicodeCodePointsEncoder,
        HashEncoder,
    ]
