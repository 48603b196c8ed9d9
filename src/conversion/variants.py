"""
Base64 variant descriptors.

A :class:`Base64Variant` parameterizes the base64 family of encodings in
:mod:`conversion.byte_encoder`. Descriptors are immutable and serialize to the
camelCase schema consumed by external callers::

    {label, description?, alphabet, padCharacter?, padCharacterOptional,
     foreignCharactersForbidden, maxLineLength?, lineSeparator?}
"""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator
from pydantic.alias_generators import to_camel

BASE64_ALPHABET_PREFIX = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"


class Base64Variant(BaseModel):
    label: str
    description: str | None = None
    alphabet: str = Field(..., min_length=64, max_length=64)
    pad_character: str | None = Field(None, min_length=1, max_length=1)
    pad_character_optional: bool = False
    foreign_characters_forbidden: bool = True
    max_line_length: PositiveInt | None = None
    line_separator: str | None = Field(None, min_length=1)

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _validate_alphabet(self) -> Self:
        if len(set(self.alphabet)) != len(self.alphabet):
            raise ValueError("Alphabet characters must be unique")
        if self.pad_character is not None and self.pad_character in self.alphabet:
            raise ValueError(f"Pad character '{self.pad_character}' is part of the alphabet")
        if self.max_line_length is not None and not self.line_separator:
            raise ValueError("A line separator is required when limiting the line length")
        return self

    def describe(self) -> dict:
        """Return the external descriptor of this variant (camelCase keys)."""
        return self.model_dump(by_alias=True, exclude_none=True)


BASE64_VARIANTS: dict[str, Base64Variant] = {
    "base64": Base64Variant(
        label="Standard 'base64' (RFC 3548, RFC 4648)",
        alphabet=BASE64_ALPHABET_PREFIX + "+/",
        pad_character="=",
        pad_character_optional=False,
        foreign_characters_forbidden=True,
    ),
    "base64url": Base64Variant(
        label="Standard 'base64url' (RFC 4648 §5)",
        description="URL and Filename Safe Alphabet",
        alphabet=BASE64_ALPHABET_PREFIX + "-_",
        pad_character="=",
        pad_character_optional=True,
        foreign_characters_forbidden=True,
    ),
    "rfc2045": Base64Variant(
        label="Transfer encoding for MIME (RFC 2045)",
        alphabet=BASE64_ALPHABET_PREFIX + "+/",
        pad_character="=",
        pad_character_optional=False,
        foreign_characters_forbidden=False,
        max_line_length=76,
        line_separator="\r\n",
    ),
    "rfc1421": Base64Variant(
        label="Original Base64 (RFC 1421)",
        description="Privacy-Enhanced Mail (PEM)",
        alphabet=BASE64_ALPHABET_PREFIX + "+/",
        pad_character="=",
        pad_character_optional=False,
        foreign_characters_forbidden=False,
        max_line_length=64,
        line_separator="\r\n",
    ),
}
