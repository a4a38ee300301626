"""Error types raised while extracting and counting articles."""


class ParseError(ValueError):
    """A fragment of an article could not be parsed."""


class DateParseError(ParseError):
    """An article date string is malformed or names an unknown month."""


class MarkerNotFoundError(RuntimeError):
    """A document ended before the in-progress article was complete."""

    def __init__(self, phase: str, publication: str | None = None):
        self.phase = phase
        self.publication = publication
        message = f"Document ended while waiting for the {phase} of an article"
        if publication:
            message += f" ({publication})"
        super().__init__(message)


class ConfigError(ValueError):
    """Configuration is present but invalid."""
