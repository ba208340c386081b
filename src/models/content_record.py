"""Canonical Confluence page record."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as returned by the content store.

    A trailing 'Z' is read as UTC. Empty values parse to None.
    """
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class ContentRecord:
    """Server-side view of a page, as returned by a fetch.

    A record is only ever built from a read of the store. Mutation
    responses are not trusted as canonical.

    Attributes:
        id: Store-assigned page identifier
        title: Page title
        body_markup: Page body in storage format (XHTML)
        space_id: Identifier of the space the page lives in
        parent_id: Identifier of the containing page (0 at space root)
        created_at: When the page was created
        version_number: Current version number, starting at 1
        version_created_at: When the current version was created
    """
    id: int
    title: str
    body_markup: str
    space_id: int
    parent_id: int
    created_at: Optional[datetime]
    version_number: int
    version_created_at: Optional[datetime]

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "ContentRecord":
        """Build a record from a page document of the REST v2 API.

        Ids may be JSON strings or numbers.

        Raises:
            KeyError: If the id or version number is missing
            ValueError: If an id or timestamp cannot be parsed
            TypeError: If a nested section has the wrong shape
        """
        version = data.get("version") or {}
        storage = (data.get("body") or {}).get("storage") or {}

        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            body_markup=storage.get("value") or "",
            space_id=int(data.get("spaceId") or 0),
            parent_id=int(data.get("parentId") or 0),
            created_at=parse_timestamp(data.get("createdAt")),
            version_number=int(version["number"]),
            version_created_at=parse_timestamp(version.get("createdAt")),
        )
