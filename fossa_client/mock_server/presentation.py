# (c) Nelen & Schuurmans

from typing import Annotated
from typing import Optional

from fastapi import Query
from pydantic import BaseModel

from fossa_client import BadRequest
from fossa_client import decode_locator
from fossa_client import Dialect
from fossa_client import DoesNotExist
from fossa_client import Json
from fossa_client import ref_of
from fossa_client import ValueObject
from fossa_client.fastapi import get
from fossa_client.fastapi import ListQuery
from fossa_client.fastapi import put
from fossa_client.fastapi import Resource
from fossa_client.fastapi import v
from fossa_client.models import IssueCategory
from fossa_client.models import newest_first
from fossa_client.models import ProjectUpdate

from .state import MockState

__all__ = [
    "GroupedRevisionResource",
    "ProjectResource",
    "RevisionResource",
    "ProjectListResource",
    "RevisionListResource",
    "DependencyResource",
    "IssueResource",
    "UNKNOWN_REF",
]

# bucket for revisions without a ref in the grouped listing
UNKNOWN_REF = "unknown"


def dump(obj: BaseModel) -> Json:
    return obj.model_dump(mode="json", by_alias=True)


class ProjectsQuery(ListQuery):
    title: Optional[str] = Query(
        None, description="Part of the title, case insensitive"
    )


class RevisionsQuery(ListQuery):
    branch: Optional[str] = Query(None, description="Only revisions of this ref")


class DependenciesQuery(ListQuery):
    count: int = Query(100, ge=1, description="Page size")


class IssuesQuery(ListQuery):
    category: Optional[str] = Query(None, description="Issue type, case insensitive")
    scope_type: Optional[str] = Query(None)
    scope_id: Optional[str] = Query(None)


class IssueQuery(ValueObject):
    category: Optional[IssueCategory] = Query(None, description="Required")


class MockStateMixin:
    def __init__(self, state: MockState):
        self.state = state


# version 1: single entities, revisions grouped by ref


class GroupedRevisionResource(
    MockStateMixin, Resource, version=v(1), name="revisions"
):
    """All revisions of a project at once, grouped by ref. Not paginated."""

    @get("/projects/{locator:path}/revisions")
    def list_revisions_grouped(self, locator: str) -> dict[str, list[Json]]:
        result: dict[str, list[Json]] = {}
        for revision in self.state.list_revisions_for_project(decode_locator(locator)):
            ref = ref_of(revision.locator) or UNKNOWN_REF
            result.setdefault(ref, []).append(dump(revision))
        return result


class ProjectResource(MockStateMixin, Resource, version=v(1), name="projects"):
    @get("/projects/{locator:path}")
    def get_project(self, locator: str) -> Json:
        locator = decode_locator(locator)
        project = self.state.get_project(locator)
        if project is None:
            raise DoesNotExist("project", locator)
        return dump(project)

    @put("/projects/{locator:path}")
    def update_project(self, locator: str, changes: ProjectUpdate) -> Json:
        # 'description' is accepted, but not stored
        locator = decode_locator(locator)
        project = self.state.update_project(
            locator, title=changes.title, url=changes.url, public=changes.public
        )
        if project is None:
            raise DoesNotExist("project", locator)
        return dump(project)


class RevisionResource(MockStateMixin, Resource, version=v(1), name="revisions"):
    @get("/revisions/{locator:path}")
    def get_revision(self, locator: str) -> Json:
        locator = decode_locator(locator)
        revision = self.state.get_revision(locator)
        if revision is None:
            raise DoesNotExist("revision", locator)
        return dump(revision)


# version 2: paginated listings


class ProjectListResource(MockStateMixin, Resource, version=v(2), name="projects"):
    """Projects, paginated with a total count"""

    @get("/projects")
    def list_projects(self, q: Annotated[ProjectsQuery, Query()]) -> Json:
        projects = self.state.list_projects(q.title)
        return {
            "projects": [dump(x) for x in q.as_page_options().apply(projects)],
            "total": len(projects),
        }


class RevisionListResource(
    MockStateMixin, Resource, version=v(2), name="revisions"
):
    """Revisions of a project, newest first, paginated with a total count"""

    @get("/projects/{locator:path}/revisions")
    def list_revisions(
        self, locator: str, q: Annotated[RevisionsQuery, Query()]
    ) -> Json:
        revisions = self.state.list_revisions_for_project(decode_locator(locator))
        if q.branch is not None:
            revisions = [x for x in revisions if ref_of(x.locator) == q.branch]
        revisions = newest_first(revisions)
        return {
            "revisions": [dump(x) for x in q.as_page_options().apply(revisions)],
            "total": len(revisions),
        }


class DependencyResource(
    MockStateMixin, Resource, version=v(2), name="dependencies"
):
    """Dependencies of a revision. The total is given as 'count'."""

    @get("/revisions/{locator:path}/dependencies")
    def list_dependencies(
        self, locator: str, q: Annotated[DependenciesQuery, Query()]
    ) -> Json:
        dependencies = self.state.get_dependencies(decode_locator(locator))
        return {
            "dependencies": [
                dump(x) for x in q.as_page_options().apply(dependencies)
            ],
            "count": len(dependencies),
        }


class IssueResource(MockStateMixin, Resource, version=v(2), name="issues"):
    """Issues. Without a total in the uncounted dialect, with one in the counted."""

    def __init__(self, state: MockState, dialect: Dialect = Dialect.UNCOUNTED):
        if dialect is Dialect.GROUPED:
            raise ValueError("issues cannot be served in the grouped dialect")
        super().__init__(state)
        self.dialect = dialect

    @get("/issues")
    def list_issues(self, q: Annotated[IssuesQuery, Query()]) -> Json:
        issues = self.state.list_issues(q.category)
        result: Json = {"issues": [dump(x) for x in q.as_page_options().apply(issues)]}
        if self.dialect is Dialect.COUNTED:
            result["total"] = len(issues)
        return result

    @get("/issues/{id}")
    def get_issue(self, id: int, q: Annotated[IssueQuery, Query()]) -> Json:
        if q.category is None:
            choices = "|".join(x.value for x in IssueCategory)
            raise BadRequest(f"category is required, expected one of {choices}")
        issue = self.state.get_issue(id)
        if issue is None:
            raise DoesNotExist("issue", id)
        return dump(issue)
