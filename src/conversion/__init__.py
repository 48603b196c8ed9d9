"""
Codec layer: stateless, pure translations between content representations.

- :mod:`conversion.byte_encoder` translates bytes from and to hex, binary
  digit and base64 family strings.
- :mod:`conversion.text_encoder` translates text from and to bytes and code points.
- :mod:`conversion.variants` holds the base64 variant descriptors.
"""

from .byte_encoder import (
    base64_string_from_bytes,
    binary_string_from_bytes,
    bytes_from_base64_string,
    bytes_from_binary_string,
    bytes_from_hex_string,
    get_base64_variants,
    hex_string_from_bytes,
)
from .exceptions import ByteEncodingError, ConversionError, TextEncodingError
from .text_encoder import DEFAULT_TEXT_ENCODING, TEXT_ENCODINGS
from .variants import BASE64_VARIANTS, Base64Variant

__all__ = [
    "BASE64_VARIANTS",
    "Base64Variant",
    "ByteEncodingError",
    "ConversionError",
    "DEFAULT_TEXT_ENCODING",
    "TEXT_ENCODINGS",
    "TextEncodingError",
    "base64_string_from_bytes",
    "binary_string_from_bytes",
    "bytes_from_base64_string",
    "bytes_from_binary_string",
    "bytes_from_hex_string",
    "get_base64_variants",
    "hex_string_from_bytes",
]
