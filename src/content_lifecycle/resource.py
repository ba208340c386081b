"""Plain-value page resource adapter.

The declarative front end that manages pages talks to the lifecycle client
through this adapter. It takes scalar arguments and returns a flat
PageState, so no framework-specific value types leak into the core.

Read semantics differ between the managed resource and the data source: a
missing page is "no longer exists" for the resource (read returns None)
but an error for the data source.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.models.content_record import ContentRecord

from .api_wrapper import APIWrapper
from .auth import Authenticator
from .client import ContentLifecycleClient
from .errors import FetchRejectedError, InvalidImportIdError, PageNotFoundError

logger = logging.getLogger(__name__)

# Any page id will do: only reachability is checked, not the status.
CONNECTIVITY_CHECK_PAGE_ID = 1


def format_rfc822(value: Optional[datetime]) -> str:
    """Render a timestamp as RFC 822 (e.g. '15 Jan 24 10:30 UTC')."""
    if value is None:
        return ""
    zone = value.tzname() or "UTC"
    return f"{value.strftime('%d %b %y %H:%M')} {zone}"


@dataclass(frozen=True)
class PageState:
    """Flat attribute set of a managed page."""
    id: int
    title: str
    body: str
    parent_id: int
    space_id: int
    created_at: str
    version_number: int
    version_created_at: str

    @classmethod
    def from_record(cls, record: ContentRecord) -> "PageState":
        return cls(
            id=record.id,
            title=record.title,
            body=record.body_markup,
            parent_id=record.parent_id,
            space_id=record.space_id,
            created_at=format_rfc822(record.created_at),
            version_number=record.version_number,
            version_created_at=format_rfc822(record.version_created_at),
        )


class PageResource:
    """Page resource handlers on top of ContentLifecycleClient.

    Changing a page's title or parent is a replacement, not an update: the
    caller deletes the page and creates a new one, with a new id.

    Example:
        >>> resource = PageResource.configure(base_url="https://example.atlassian.net")
        >>> state = resource.create(parent_id=33296, title="Runbook", body="<p>v1</p>")
        >>> resource.read(state.id).version_number
        1
    """

    def __init__(self, client: ContentLifecycleClient):
        self.client = client

    @classmethod
    def configure(
        cls,
        base_url: Optional[str] = None,
        username: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> "PageResource":
        """Resolve credentials, build the client and check the store is reachable.

        Raises:
            InvalidCredentialsError: If a setting is missing after env fallback
            TransportError: If the store cannot be reached
        """
        logger.info("Configuring Confluence client")
        authenticator = Authenticator(base_url=base_url, username=username, api_key=api_key)
        creds = authenticator.get_credentials()

        api = APIWrapper(authenticator)
        api.get_page(CONNECTIVITY_CHECK_PAGE_ID)

        logger.info(f"Configured Confluence client for {creds.base_url}")
        return cls(ContentLifecycleClient(api=api))

    def create(self, parent_id: int, title: str, body: str) -> PageState:
        record = self.client.create(parent_id, title, body)
        logger.debug(f"Created page resource {record.id}")
        return PageState.from_record(record)

    def read(self, page_id: int) -> Optional[PageState]:
        """Refresh a managed page.

        Returns:
            The page's state, or None if the page no longer exists

        Raises:
            FetchRejectedError: If the store answers anything but 200 or 404
        """
        result = self.client.fetch_by_id(page_id)
        if result.not_found:
            logger.info(f"Page {page_id} no longer exists, dropping it from state")
            return None
        if not result.found:
            raise FetchRejectedError(page_id, result.status_code, result.reason, result.body)
        return PageState.from_record(result.record)  # type: ignore[arg-type]

    def read_data_source(self, page_id: int) -> PageState:
        """Look up an existing page that is not managed here.

        Raises:
            PageNotFoundError: If the page does not exist
            FetchRejectedError: If the store answers anything but 200
        """
        result = self.client.fetch_by_id(page_id)
        if result.not_found:
            raise PageNotFoundError(page_id, result.reason or "Not Found", result.body)
        if not result.found:
            raise FetchRejectedError(page_id, result.status_code, result.reason, result.body)
        return PageState.from_record(result.record)  # type: ignore[arg-type]

    def update(self, page_id: int, body: str) -> PageState:
        """Replace the body of a managed page; its history is pruned to one version."""
        record = self.client.update(page_id, body, remove_previous_versions=True)
        logger.debug(f"Updated page resource {page_id} to v{record.version_number}")
        return PageState.from_record(record)

    def delete(self, page_id: int) -> None:
        self.client.delete(page_id)
        logger.debug(f"Deleted page resource {page_id}")

    @staticmethod
    def import_id(raw_id: str) -> int:
        """Parse the identifier given when importing an existing page.

        Raises:
            InvalidImportIdError: If raw_id is not a positive integer
        """
        try:
            page_id = int(str(raw_id).strip())
        except ValueError as e:
            raise InvalidImportIdError(raw_id) from e
        if page_id < 1:
            raise InvalidImportIdError(raw_id)
        return page_id
