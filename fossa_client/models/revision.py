# (c) Nelen & Schuurmans

from collections.abc import Iterable
from datetime import datetime
from datetime import timezone
from typing import Optional

from fossa_client.base.domain import fetcher_of
from fossa_client.base.domain import Json
from fossa_client.base.domain import split_revision
from fossa_client.base.domain import ValueObject

__all__ = ["Revision", "RevisionStats", "RevisionListQuery", "newest_first"]

EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class RevisionStats(ValueObject):
    total_dependencies: int = 0
    direct_dependencies: int = 0
    transitive_dependencies: int = 0


class Revision(ValueObject):
    """A scanned revision of a project: 'custom+org/project$ref'"""

    locator: str
    resolved: bool = False
    source: Optional[str] = None
    source_type: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: Optional[str] = None
    url: Optional[str] = None
    unresolved_issue_count: Optional[int] = None
    stats: Optional[RevisionStats] = None

    @property
    def project_locator(self) -> str:
        return split_revision(self.locator)[0]

    @property
    def ref(self) -> Optional[str]:
        return split_revision(self.locator)[1]

    @property
    def fetcher(self) -> Optional[str]:
        return fetcher_of(self.locator)


class RevisionListQuery(ValueObject):
    project: str
    branch: Optional[str] = None

    def as_params(self) -> Json:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"project"})


def _sort_key(revision: Revision) -> tuple[bool, datetime]:
    created_at = revision.created_at
    if created_at is None:
        return (False, EPOCH)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return (True, created_at)


def newest_first(revisions: Iterable[Revision]) -> list[Revision]:
    """Sort by created_at, newest first. Revisions without one go last.

    The sort is stable: equal timestamps keep their order.
    """
    return sorted(revisions, key=_sort_key, reverse=True)
