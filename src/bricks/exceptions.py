"""Exceptions raised by bricks, their settings and the brick registry."""


class TransformError(Exception):
    """Raised when an encoder rejects its input given its current settings."""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidInputError(ValueError):
    """Raised when a setting value violates the validity predicate of its field."""

    def __init__(self, field_name: str, value: object, reason: str | None = None) -> None:
        self.field_name = field_name
        self.value = value
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid value {value!r} for setting '{field_name}'{detail}")


class ConfigurationError(Exception):
    """Raised when bricks are registered or resolved inconsistently."""


class BrickAlreadyRegisteredError(ConfigurationError):
    """Raised when attempting to register a brick with a name that already exists."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(
            f"Brick '{identifier}' is already registered. "
            f"Use a different name or reset the registry first."
        )


class UnknownBrickError(ConfigurationError, LookupError):
    """Raised when no brick is registered under the requested name."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Brick '{identifier}' is not registered")
