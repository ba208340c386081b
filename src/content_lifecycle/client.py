"""Content lifecycle client for a single Confluence page.

This module owns the five remote operations (fetch, create, update, delete,
prune) and the shaping between plain fields and the store's versioned JSON
documents. No page is cached between calls: every operation reads the store
again or is handed what it needs, so the store stays the single source of
truth.

Create and update both read the store more than once. The read before an
update supplies the version number to write. The read after a mutation
supplies the canonical record, because the store normalizes pages and
only shows some fields on read. The two reads are kept as separate calls.
"""

import logging
from typing import Any, Dict, Optional

from src.markup_validator.validator import MarkupValidator
from src.models.content_record import ContentRecord

from .api_wrapper import APIWrapper, ApiResponse
from .auth import Authenticator
from .errors import (
    CreateRejectedError,
    DeleteRejectedError,
    FetchRejectedError,
    InvalidPruneRequestError,
    PageNotFoundError,
    ParentLookupError,
    ResponseDecodeError,
    UpdateRejectedError,
)
from .models import FetchResult, PruneResult

logger = logging.getLogger(__name__)

STATUS_CURRENT = "current"
STORAGE_REPRESENTATION = "storage"
VERSIONS_TO_KEEP = 1
DELETE_SUCCESS_STATUSES = (200, 204)


def _storage_body(body: str) -> Dict[str, Any]:
    return {"storage": {"value": body, "representation": STORAGE_REPRESENTATION}}


def build_create_request(
    title: str,
    space_id: int,
    body: str,
    parent_id: int,
) -> Dict[str, Any]:
    """Build the JSON document for a page creation request."""
    return {
        "status": STATUS_CURRENT,
        "title": title,
        "spaceId": space_id,
        "parentId": parent_id,
        "body": _storage_body(body),
    }


def build_update_request(current: ContentRecord, body: str) -> Dict[str, Any]:
    """Build the JSON document for the next version of a page.

    Title and space are carried over: an update never renames or moves.
    """
    return {
        "id": current.id,
        "status": STATUS_CURRENT,
        "title": current.title,
        "spaceId": current.space_id,
        "body": _storage_body(body),
        "version": {"number": current.version_number + 1},
    }


class ContentLifecycleClient:
    """Create, read, update, delete and prune a Confluence page.

    Every operation is synchronous and issues its HTTP calls strictly in
    order. Failures are raised once and never retried.

    Usage:
        client = ContentLifecycleClient()

        record = client.create(parent_id=33296, title="Runbook", body="<p>v1</p>")
        record = client.update(record.id, "<p>v2</p>")   # history pruned to 1
        client.delete(record.id)
    """

    def __init__(
        self,
        api: Optional[APIWrapper] = None,
        validator: Optional[MarkupValidator] = None,
    ):
        """Initialize the client.

        Args:
            api: APIWrapper instance. If None, creates one with credentials
                 resolved from the environment.
            validator: Markup validator run before every create and update
        """
        if api is None:
            api = APIWrapper(Authenticator())
        self.api = api
        self.validator = validator or MarkupValidator()

    def fetch_by_id(self, page_id: int) -> FetchResult:
        """Fetch a page, passing the HTTP status through.

        Returns:
            FetchResult with the record on 200, or only the status otherwise

        Raises:
            TransportError: If the store cannot be reached
            ResponseDecodeError: If a 200 response is not a page document
        """
        response = self.api.get_page(page_id)
        if response.status_code != 200:
            logger.debug(
                f"Fetch of page {page_id} returned {response.status_code} {response.reason}"
            )
            return FetchResult(
                record=None,
                status_code=response.status_code,
                reason=response.reason,
                body=response.text,
            )

        record = self._decode_record(response, f"fetch_by_id({page_id})")
        return FetchResult(record=record, status_code=200, reason=response.reason)

    def create(self, parent_id: int, title: str, body: str) -> ContentRecord:
        """Create a page under a parent and return its canonical record.

        The new page inherits the parent's space.

        Raises:
            ValidationError: If the body is refused by the validator
            ParentLookupError: If the parent cannot be fetched
            CreateRejectedError: If the store refuses the creation
            FetchRejectedError: If the new page cannot be read back
        """
        self.validator.check(body)

        logger.debug(f"Creating page: {title} under parent {parent_id}")
        parent = self.fetch_by_id(parent_id)
        if not parent.found:
            raise ParentLookupError(parent_id, parent.status_code, parent.reason, parent.body)

        payload = build_create_request(title, parent.record.space_id, body, parent_id)
        response = self.api.create_page(payload)
        if response.status_code != 200:
            logger.error(f"  Failed to create page {title}: {response.status_code} {response.reason}")
            raise CreateRejectedError(None, response.status_code, response.reason, response.text)

        new_id = self._decode_new_id(response)
        logger.debug(f"  Created: {new_id}")
        return self._read_canonical(new_id)

    def update(
        self,
        page_id: int,
        body: str,
        remove_previous_versions: bool = True,
    ) -> ContentRecord:
        """Replace a page's body and return its canonical record.

        Args:
            page_id: Page to update
            body: New body in storage format
            remove_previous_versions: Prune the history back to one version

        Raises:
            ValidationError: If the body is refused by the validator
            PageNotFoundError: If the page does not exist (no update is sent)
            FetchRejectedError: If the page cannot be read
            UpdateRejectedError: If the store refuses the new version
        """
        self.validator.check(body)

        logger.debug(f"Updating page content: {page_id}")
        current = self._read_current_version(page_id)

        payload = build_update_request(current, body)
        new_version = payload["version"]["number"]
        response = self.api.update_page(page_id, payload)
        if response.status_code != 200:
            logger.error(
                f"  Failed to update page {page_id}: {response.status_code} {response.reason}"
            )
            raise UpdateRejectedError(page_id, response.status_code, response.reason)

        logger.debug(f"  Updated: v{current.version_number} → v{new_version}")

        if remove_previous_versions:
            self.prune(page_id, keep=VERSIONS_TO_KEEP, current_version=new_version)

        return self._read_canonical(page_id)

    def prune(
        self,
        page_id: int,
        keep: int,
        current_version: Optional[int] = None,
    ) -> PruneResult:
        """Delete old versions until only `keep` remain.

        Deletions go through delete_oldest_version one at a time. The loop
        counts down on its own rather than re-reading the history between
        deletions. A deletion that does not answer 204 is logged and
        skipped.

        Args:
            page_id: Page whose history is pruned
            keep: Number of versions to retain, at least 1
            current_version: Current version number, if already known.
                             Read from the store otherwise.

        Raises:
            InvalidPruneRequestError: If keep < 1 (nothing is deleted)
            PageNotFoundError: If the current version has to be read and
                               the page does not exist
        """
        if keep < 1:
            raise InvalidPruneRequestError(keep)

        if current_version is None:
            current_version = self._read_current_version(page_id).version_number

        versions_to_delete = current_version - keep
        result = PruneResult(page_id=page_id)

        while versions_to_delete > 0:
            logger.info(f"Deleting version: {versions_to_delete} of page {page_id}")
            response = self.api.delete_oldest_version(page_id)
            result.requested += 1

            if response.status_code == 204:
                result.deleted += 1
            else:
                logger.warning(
                    f"Unable to delete version of page {page_id}. - "
                    f"Code: {response.status_code} - Reason: {response.reason}"
                )
                result.failed_statuses.append(response.status_code)

            versions_to_delete -= 1

        return result

    def delete(self, page_id: int) -> None:
        """Delete a page. Child pages and history are left to the store.

        Raises:
            DeleteRejectedError: If the store refuses the deletion
        """
        logger.debug(f"Deleting page: {page_id}")
        response = self.api.delete_page(page_id)
        # The page contract names 200 only. The v2 endpoint answers 204, so
        # both are accepted on purpose.
        if response.status_code not in DELETE_SUCCESS_STATUSES:
            logger.error(
                f"  Failed to delete page {page_id}: {response.status_code} {response.reason}"
            )
            raise DeleteRejectedError(page_id, response.status_code, response.reason)
        logger.debug(f"  Deleted: {page_id}")

    def _read_current_version(self, page_id: int) -> ContentRecord:
        """Read the page a mutation is about to build on."""
        return self._require_page(page_id)

    def _read_canonical(self, page_id: int) -> ContentRecord:
        """Read the store's view of a page after a mutation."""
        return self._require_page(page_id)

    def _require_page(self, page_id: int) -> ContentRecord:
        result = self.fetch_by_id(page_id)
        if result.not_found:
            raise PageNotFoundError(page_id, result.reason or "Not Found", result.body)
        if not result.found:
            raise FetchRejectedError(page_id, result.status_code, result.reason, result.body)
        return result.record  # type: ignore[return-value]

    def _decode_record(self, response: ApiResponse, operation: str) -> ContentRecord:
        try:
            return ContentRecord.from_api_response(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise ResponseDecodeError(operation, f"{type(e).__name__}: {e}") from e

    def _decode_new_id(self, response: ApiResponse) -> int:
        try:
            return int(response.json()["id"])
        except (ValueError, KeyError, TypeError) as e:
            raise ResponseDecodeError("create", f"{type(e).__name__}: {e}") from e
