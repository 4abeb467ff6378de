"""Exception types raised by the actor client."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raw input that cannot be turned into a valid run input."""

    def __init__(self, message: str, fields: list[str]) -> None:
        super().__init__(message)
        self.fields = fields

    @classmethod
    def for_field(cls, field: str, reason: str) -> "ValidationError":
        return cls(f'Field "{field}" {reason}', [field])

    @classmethod
    def missing(cls, fields: list[str]) -> "ValidationError":
        return cls(f"Missing required fields: {', '.join(fields)}", list(fields))


class ActorNotFoundError(LookupError):
    pass


class RunSubmissionError(RuntimeError):
    pass


class ActorLoadError(RuntimeError):
    """The platform refused or failed the actor lookup, e.g. for a bad token."""
