"""Exceptions raised by the storage-format markup validator."""

from src.content_lifecycle.errors import LifecycleError


class ValidationError(LifecycleError):
    """Base exception for markup the content store would refuse."""
    pass


class MalformedMarkupError(ValidationError):
    """Raised when the markup cannot be parsed, even leniently."""

    def __init__(self, line: int, reason: str):
        super().__init__(f"XML syntax error on line {line}: {reason}")
        self.line = line
        self.reason = reason


class DisallowedTagFormError(ValidationError):
    """Raised when a void element is written in a form the store rejects."""

    def __init__(self, found: str, required: str):
        super().__init__(
            f"Invalid Html specified ({found}). Suggestion: Confluence requires: {required}"
        )
        self.found = found
        self.required = required
