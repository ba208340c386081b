"""Typed exception hierarchy for the page lifecycle client.

This module defines all custom exceptions raised by the content lifecycle
client. Everything inherits from LifecycleError so callers can catch the
whole family at once, and remote rejections carry the HTTP status, reason
and raw body for diagnosis.
"""

from typing import Optional


class LifecycleError(Exception):
    """Base exception for all page lifecycle errors."""
    pass


class InvalidCredentialsError(LifecycleError):
    """Raised when the endpoint/credential triple cannot be resolved."""

    def __init__(self, missing: list, user: Optional[str] = None, endpoint: Optional[str] = None):
        super().__init__(
            f"Missing Confluence configuration: {', '.join(missing)} "
            f"(user: {user or 'unknown'}, endpoint: {endpoint or 'unknown'}). "
            f"Set the value explicitly or through the environment."
        )
        self.missing = list(missing)
        self.user = user or "unknown"
        self.endpoint = endpoint or "unknown"


class TransportError(LifecycleError):
    """Raised when the content store cannot be reached (network, timeout)."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"API is not available at {endpoint}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class ResponseDecodeError(LifecycleError):
    """Raised when a successful response does not hold a page document."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Unable to decode response of {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class InvalidPruneRequestError(LifecycleError, ValueError):
    """Raised when version pruning is asked to keep fewer than one version."""

    def __init__(self, keep: int):
        super().__init__(f"Must keep at least 1 version (requested keep={keep})")
        self.keep = keep


class InvalidPageIdError(LifecycleError, ValueError):
    """Raised when a page identifier is not a positive integer."""

    def __init__(self, page_id, reason: str = "Page IDs must be positive integers"):
        super().__init__(f"Invalid page_id {page_id!r}: {reason}")
        self.page_id = page_id
        self.reason = reason


class InvalidImportIdError(LifecycleError, ValueError):
    """Raised when an imported page identifier is not an integer."""

    def __init__(self, raw_id: str):
        super().__init__(
            f"Could not import page, unexpected error (ID should be an integer): {raw_id!r}"
        )
        self.raw_id = raw_id


class RemoteRejectionError(LifecycleError):
    """Raised when the content store answers with an unexpected status."""

    action = "calling"

    def __init__(
        self,
        page_id: Optional[int],
        status_code: int,
        reason: str = "",
        body: str = "",
    ):
        message = f"Error {self.action} content: Status: {status_code}, Reason: {reason}"
        if page_id is not None:
            message += f" (page {page_id})"
        if body:
            message += f" - Body: {body}"
        super().__init__(message)
        self.page_id = page_id
        self.status_code = status_code
        self.reason = reason
        self.body = body


class FetchRejectedError(RemoteRejectionError):
    """Raised when a fetch inside a multi-step operation does not return 200."""

    action = "reading"


class PageNotFoundError(FetchRejectedError):
    """Raised when a page required by an operation does not exist."""

    def __init__(self, page_id: int, reason: str = "Not Found", body: str = ""):
        super().__init__(page_id, 404, reason, body)


class ParentLookupError(RemoteRejectionError):
    """Raised when the parent of a page to be created cannot be fetched."""

    action = "looking up parent"


class CreateRejectedError(RemoteRejectionError):
    """Raised when the store refuses to create a page."""

    action = "creating"


class UpdateRejectedError(RemoteRejectionError):
    """Raised when the store refuses a new page version."""

    action = "updating"


class DeleteRejectedError(RemoteRejectionError):
    """Raised when the store refuses to delete a page."""

    action = "deleting"
