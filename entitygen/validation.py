"""Errors raised while resolving schema definitions."""


class ValidationError(Exception):
    """Raised when a schema cannot be resolved."""

    pass


class SchemaError(ValidationError):
    """Raised when a definition is structurally malformed.

    Fatal for the offending definition only; the generator records it and
    keeps processing the rest of the graph.
    """

    def __init__(self, message: str, definition: str | None = None):
        super().__init__(message)
        self.definition = definition
