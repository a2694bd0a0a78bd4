# (c) Nelen & Schuurmans

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from fossa_client.base.domain import Json
from fossa_client.base.domain import ValueObject

__all__ = [
    "Issue",
    "IssueCategory",
    "IssueSource",
    "IssueDepths",
    "IssueStatuses",
    "IssueProject",
    "IssueListQuery",
]


class IssueCategory(str, Enum):
    VULNERABILITY = "vulnerability"
    LICENSING = "licensing"
    QUALITY = "quality"


class IssueSource(ValueObject):
    id: str
    name: Optional[str] = None
    url: Optional[str] = None
    version: Optional[str] = None
    package_manager: Optional[str] = None


class IssueDepths(ValueObject):
    direct: int = 0
    deep: int = 0


class IssueStatuses(ValueObject):
    active: int = 0
    ignored: int = 0


class IssueProject(ValueObject):
    id: str
    status: Optional[str] = None
    depth: Optional[int] = None
    title: Optional[str] = None


class Issue(ValueObject):
    id: int
    issue_type: str = Field(alias="type")
    created_at: Optional[datetime] = None
    source: IssueSource
    depths: IssueDepths = IssueDepths()
    statuses: IssueStatuses = IssueStatuses()
    projects: list[IssueProject] = []
    # vulnerability fields
    vuln_id: Optional[str] = None
    title: Optional[str] = None
    cve: Optional[str] = None
    cvss: Optional[float] = None
    severity: Optional[str] = None
    details: Optional[str] = None
    cwes: list[str] = []
    published: Optional[datetime] = None
    # licensing fields
    license: Optional[str] = None

    def is_vulnerability(self) -> bool:
        return self.issue_type == IssueCategory.VULNERABILITY.value

    def is_licensing(self) -> bool:
        return self.issue_type == IssueCategory.LICENSING.value

    def is_quality(self) -> bool:
        return self.issue_type == IssueCategory.QUALITY.value

    @property
    def source_locator(self) -> str:
        return self.source.id


class IssueListQuery(ValueObject):
    category: Optional[IssueCategory] = None
    scope_type: Optional[str] = None
    scope_id: Optional[str] = None

    def as_params(self) -> Json:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
