from bricks.exceptions import ConfigurationError


class PipeLoadError(ConfigurationError):
    """Raised when a serialized pipe references unknown bricks or invalid settings."""

    def __init__(self, problems: list[str], missing_identifiers: list[str] | None = None) -> None:
        self.problems = problems
        self.missing_identifiers = missing_identifiers or []
        super().__init__("Pipe could not be loaded: " + "; ".join(problems))
