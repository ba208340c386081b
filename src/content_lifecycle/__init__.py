"""Content lifecycle client for Confluence pages.

This package manages a single Confluence page against the Cloud REST API:
create, read, update with history pruning, and delete. Use
src.content_lifecycle.client.ContentLifecycleClient for the operations and
src.content_lifecycle.resource.PageResource for the plain-value adapter.
"""

from .errors import (
    LifecycleError,
    InvalidCredentialsError,
    TransportError,
    ResponseDecodeError,
    InvalidPruneRequestError,
    InvalidImportIdError,
    InvalidPageIdError,
    RemoteRejectionError,
    FetchRejectedError,
    PageNotFoundError,
    ParentLookupError,
    CreateRejectedError,
    UpdateRejectedError,
    DeleteRejectedError,
)

__all__ = [
    "LifecycleError",
    "InvalidCredentialsError",
    "TransportError",
    "ResponseDecodeError",
    "InvalidPruneRequestError",
    "InvalidImportIdError",
    "InvalidPageIdError",
    "RemoteRejectionError",
    "FetchRejectedError",
    "PageNotFoundError",
    "ParentLookupError",
    "CreateRejectedError",
    "UpdateRejectedError",
    "DeleteRejectedError",
]
