# (c) Nelen & Schuurmans

from datetime import datetime
from typing import Optional

from pydantic import Field

from fossa_client.base.domain import fetcher_of
from fossa_client.base.domain import Json
from fossa_client.base.domain import ValueObject

__all__ = [
    "Project",
    "ProjectIssues",
    "LatestRevision",
    "ProjectListQuery",
    "ProjectUpdate",
]


class ProjectIssues(ValueObject):
    total: int = 0
    licensing: int = 0
    security: int = 0
    quality: int = 0


class LatestRevision(ValueObject):
    locator: str
    message: Optional[str] = None


class Project(ValueObject):
    """A project, identified by its locator (e.g. 'custom+org/project')"""

    id: str
    title: str
    branch: Optional[str] = None
    version: Optional[str] = None
    project_type: Optional[str] = Field(None, alias="type")
    url: Optional[str] = None
    public: bool = False
    scanned: Optional[datetime] = None
    last_analyzed: Optional[datetime] = None
    issues: Optional[ProjectIssues] = None
    labels: list[str] = []
    teams: list[str] = []
    latest_revision: Optional[LatestRevision] = None
    latest_build_status: Optional[str] = None

    @property
    def locator(self) -> str:
        return self.id

    @property
    def fetcher(self) -> Optional[str]:
        return fetcher_of(self.id)

    def is_analyzed(self) -> bool:
        return self.latest_revision is not None

    def latest_revision_locator(self) -> Optional[str]:
        if self.latest_revision is None:
            return None
        return self.latest_revision.locator


class ProjectListQuery(ValueObject):
    title: Optional[str] = None
    sort: Optional[str] = None

    def as_params(self) -> Json:
        return self.model_dump(by_alias=True, exclude_none=True)


class ProjectUpdate(ValueObject):
    """Fields to change on a project; fields that are not given stay as they are"""

    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    public: Optional[bool] = None
