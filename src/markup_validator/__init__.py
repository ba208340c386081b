"""Storage-format markup validation for Confluence page bodies."""

from .errors import ValidationError, MalformedMarkupError, DisallowedTagFormError
from .validator import MarkupValidator

__all__ = [
    "ValidationError",
    "MalformedMarkupError",
    "DisallowedTagFormError",
    "MarkupValidator",
]
