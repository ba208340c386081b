"""Result types returned by the content lifecycle client."""

from dataclasses import dataclass, field
from typing import List, Optional

from src.models.content_record import ContentRecord


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single page fetch.

    The HTTP status is always reported. A non-200 fetch is not an error at
    this level: callers decide whether a 404 means "gone" or "broken".

    Attributes:
        record: Decoded page, or None when the status was not 200
        status_code: HTTP status of the fetch
        reason: HTTP reason phrase
        body: Raw response body for non-200 answers
    """
    record: Optional[ContentRecord]
    status_code: int
    reason: str = ""
    body: str = ""

    @property
    def found(self) -> bool:
        return self.status_code == 200 and self.record is not None

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


@dataclass
class PruneResult:
    """Outcome of a version pruning pass.

    Pruning is best effort: a refused deletion is recorded here and in the
    log, and the pass carries on.

    Attributes:
        page_id: Page whose history was pruned
        requested: Number of deletions the pass issued
        deleted: Number of deletions the store confirmed with 204
        failed_statuses: HTTP status of each refused deletion
    """
    page_id: int
    requested: int = 0
    deleted: int = 0
    failed_statuses: List[int] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed_statuses
