"""Concrete encoder bricks, one per module."""

from .a1z26 import A1Z26Encoder
from .base64 import Base64Encoder
from .caesar_cipher import CaesarCipherEncoder
from .case_transform import CaseTransformEncoder
from .hash import HashEncoder
from .reverse import ReverseEncoder
from .rot13 import ROT13Encoder
from .unicode_code_points import UnicodeCodePointsEncoder
from .url_encoding import URLEncoder

__all__ = [
    "A1Z26Encoder",
    "Base64Encoder",
    "CaesarCipherEncoder",
    "CaseTransformEncoder",
    "HashEncoder",
    "ROT13Encoder",
    "ReverseEncoder",
    "URLEncoder",
    "UnicodeCodePointsEncoder",
]
