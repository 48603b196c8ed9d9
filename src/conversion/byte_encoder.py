"""
Translations between bytes and their string representations.

Every function here is pure. Decoders reject malformed or out-of-alphabet
input with a :class:`~conversion.exceptions.ByteEncodingError` and never
coerce it silently.
"""

import re
from typing import Final

from conversion.exceptions import ByteEncodingError
from conversion.utils import chunk
from conversion.variants import BASE64_VARIANTS, Base64Variant

_HEX_BYTE: Final[re.Pattern[str]] = re.compile(r"[0-9a-fA-F]{2}")
_BINARY_BYTE: Final[re.Pattern[str]] = re.compile(r"[01]{8}")


def hex_string_from_bytes(data: bytes) -> str:
    """Return the lowercase hex string representing the given bytes."""
    return "".join(f"{byte:02x}" for byte in data)


def bytes_from_hex_string(string: str) -> bytes:
    """
    Return the bytes encoded by a hex string.

    An odd number of digits is filled up with a leading zero.

    :param string: Hex string, case insensitive.
    :return: Decoded bytes.
    :raises ByteEncodingError: If a two character group is not a hex encoded byte.
    """
    if len(string) % 2 == 1:
        string = "0" + string

    decoded = bytearray()
    for byte_string in chunk(string, 2):
        if not _HEX_BYTE.fullmatch(byte_string):
            raise ByteEncodingError(f"Invalid hex encoded byte '{byte_string}'")
        decoded.append(int(byte_string, 16))
    return bytes(decoded)


def binary_string_from_bytes(data: bytes) -> str:
    """Return the binary digit string (8 digits per byte) representing the given bytes."""
    return "".join(f"{byte:08b}" for byte in data)


def bytes_from_binary_string(string: str) -> bytes:
    """
    Return the bytes encoded by a binary digit string.

    The string is filled up with leading zeros to a multiple of 8 digits.

    :raises ByteEncodingError: If a group of 8 characters is not a binary encoded byte.
    """
    if remainder := len(string) % 8:
        string = "0" * (8 - remainder) + string

    decoded = bytearray()
    for byte_string in chunk(string, 8):
        if not _BINARY_BYTE.fullmatch(byte_string):
            raise ByteEncodingError(f"Invalid binary encoded byte '{byte_string}'")
        decoded.append(int(byte_string, 2))
    return bytes(decoded)


def resolve_base64_variant(variant: str | Base64Variant) -> Base64Variant:
    """
    Return the variant descriptor for a variant name or descriptor.

    :raises KeyError: If no variant is known under the given name.
    """
    if isinstance(variant, Base64Variant):
        return variant
    try:
        return BASE64_VARIANTS[variant]
    except KeyError:
        raise KeyError(f"Unknown base64 variant '{variant}'") from None


def base64_string_from_bytes(data: bytes, variant: str | Base64Variant = "base64") -> str:
    """
    Return the base64 string representing the given bytes.

    :param data: Bytes to encode.
    :param variant: Variant name (see :data:`~conversion.variants.BASE64_VARIANTS`) or descriptor.
    :return: Encoded string, wrapped into lines if the variant limits the line length.
    """
    options = resolve_base64_variant(variant)
    alphabet = options.alphabet
    pad = options.pad_character if options.pad_character and not options.pad_character_optional else ""

    characters: list[str] = []
    for index in range(0, len(data), 3):
        group = data[index : index + 3]
        byte1 = group[0]
        byte2 = group[1] if len(group) > 1 else 0
        byte3 = group[2] if len(group) > 2 else 0

        # Bits 1-6 of byte 1
        characters.append(alphabet[byte1 >> 2])
        # Bits 7-8 of byte 1 joined by bits 1-4 of byte 2
        characters.append(alphabet[((byte1 & 0b11) << 4) | (byte2 >> 4)])
        # Bits 5-8 of byte 2 joined by bits 1-2 of byte 3
        characters.append(alphabet[((byte2 & 0b1111) << 2) | (byte3 >> 6)] if len(group) > 1 else pad)
        # Bits 3-8 of byte 3
        characters.append(alphabet[byte3 & 0b111111] if len(group) > 2 else pad)

    string = "".join(characters)
    if options.max_line_length and options.line_separator:
        string = options.line_separator.join(chunk(string, options.max_line_length))
    return string


def bytes_from_base64_string(string: str, variant: str | Base64Variant = "base64") -> bytes:
    """
    Return the bytes encoded by a base64 string.

    Line separators and pad characters are skipped. Characters outside the
    alphabet are skipped if the variant tolerates them.

    :raises ByteEncodingError: On a forbidden character or if a single encoded
        character remains in the last quadruple.
    """
    options = resolve_base64_variant(variant)
    separator = options.line_separator

    octets: list[int] = []
    index = 0
    while index < len(string):
        character = string[index]
        if separator and string.startswith(separator, index):
            index += len(separator)
            continue
        if character != options.pad_character:
            octet = options.alphabet.find(character)
            if octet != -1:
                octets.append(octet)
            elif options.foreign_characters_forbidden:
                raise ByteEncodingError(f"Forbidden character '{character}' at index {index}")
        index += 1

    padding = (4 - len(octets) % 4) % 4
    if padding == 3:
        raise ByteEncodingError(
            "A single remaining encoded character in the last quadruple or a "
            "padding of 3 characters is not allowed"
        )
    octets.extend([0] * padding)

    decoded = bytearray()
    for index in range(0, len(octets), 4):
        octet1, octet2, octet3, octet4 = octets[index : index + 4]
        # Bits 1-6 of octet 1 joined by bits 1-2 of octet 2
        decoded.append((octet1 << 2) | (octet2 >> 4))
        # Bits 3-6 of octet 2 joined by bits 1-4 of octet 3
        decoded.append(((octet2 & 0b1111) << 4) | (octet3 >> 2))
        # Bits 5-6 of octet 3 joined by bits 1-6 of octet 4
        decoded.append(((octet3 & 0b11) << 6) | octet4)

    return bytes(decoded[: len(decoded) - padding])


def get_base64_variants() -> list[dict[str, str | None]]:
    """Return name, label and description of the available base64 variants."""
    return [
        {"name": name, "label": options.label, "description": options.description}
        for name, options in BASE64_VARIANTS.items()
    ]
