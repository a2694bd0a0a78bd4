# (c) Nelen & Schuurmans

from typing import Optional
from typing import Union

from pydantic import Field

from fossa_client.base.domain import fetcher_of
from fossa_client.base.domain import Json
from fossa_client.base.domain import package_of
from fossa_client.base.domain import ValueObject
from fossa_client.base.domain import version_of

__all__ = ["Dependency", "DependencyIssue", "License", "DependencyListQuery"]


class License(ValueObject):
    id: Optional[str] = None
    title: Optional[str] = None
    declared: bool = False
    discovered: bool = False


class DependencyIssue(ValueObject):
    id: int
    issue_type: str = Field(alias="type")
    status: str = "active"
    severity: Optional[str] = None
    cve: Optional[str] = None
    cvss_score: Optional[float] = None


class Dependency(ValueObject):
    """A package used by a revision: 'npm+lodash$4.17.21'"""

    locator: str
    title: Optional[str] = None
    depth: int = 0
    is_manual: bool = False
    is_ignored: bool = False
    is_unknown: bool = False
    # the API returns either plain license ids or license objects
    licenses: list[Union[License, str]] = []
    declared_licenses: list[str] = []
    origin_paths: list[str] = []
    package_labels: list[str] = []
    issues: list[DependencyIssue] = []
    version: Optional[str] = None

    def is_direct(self) -> bool:
        return self.depth <= 1

    def is_transitive(self) -> bool:
        return self.depth > 1

    def has_issues(self) -> bool:
        return len(self.issues) > 0

    @property
    def package_name(self) -> str:
        return package_of(self.locator)

    @property
    def fetcher(self) -> Optional[str]:
        return fetcher_of(self.locator)

    @property
    def locator_version(self) -> Optional[str]:
        return version_of(self.locator)


class DependencyListQuery(ValueObject):
    revision: str
    title: Optional[str] = None
    show_ignored: Optional[bool] = None
    direct_only: Optional[bool] = None
    fetcher: Optional[str] = None

    def as_params(self) -> Json:
        return self.model_dump(
            by_alias=True, exclude_none=True, exclude={"revision"}
        )
