class ConversionError(ValueError):
    """Raised when a representation cannot be converted into another one."""

    def __init__(self, message: str):
        super().__init__(message)


class ByteEncodingError(ConversionError):
    """Raised when a string does not hold a valid encoding of bytes (hex, binary, base64)."""


class TextEncodingError(ConversionError):
    """Raised when bytes or code points do not form valid text under a text encoding."""
