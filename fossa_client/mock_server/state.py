# (c) Nelen & Schuurmans

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional
from typing import TYPE_CHECKING

from fossa_client import belongs_to
from fossa_client.models import Dependency
from fossa_client.models import Issue
from fossa_client.models import Project
from fossa_client.models import Revision

if TYPE_CHECKING:
    from .fixtures import Scenario

__all__ = ["MockState", "ReadWriteLock"]


class ReadWriteLock:
    """Many readers or one writer.

    A waiting writer blocks new readers, so writers cannot starve. The lock
    is not reentrant.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class MockState:
    """The data served by the mock server.

    All collections keep insertion order, which makes listings deterministic.
    Every method takes the lock itself: shared for reading, exclusive for
    writing. Entities are frozen, so they can be handed out without copying.
    """

    def __init__(self):
        self.lock = ReadWriteLock()
        self._projects: dict[str, Project] = {}
        self._revisions: dict[str, Revision] = {}
        self._dependencies: dict[str, list[Dependency]] = {}
        self._issues: dict[int, Issue] = {}
        self._required_token: Optional[str] = None

    @classmethod
    def from_scenario(cls, scenario: "Scenario") -> "MockState":
        state = cls()
        for project in scenario.projects:
            state.with_project(project)
        for revision in scenario.revisions:
            state.with_revision(revision)
        for revision_locator, dependencies in scenario.dependencies.items():
            state.with_dependencies(revision_locator, dependencies)
        for issue in scenario.issues:
            state.with_issue(issue)
        return state

    # seeding

    def with_project(self, project: Project) -> "MockState":
        with self.lock.write():
            self._projects[project.id] = project
        return self

    def with_revision(self, revision: Revision) -> "MockState":
        with self.lock.write():
            self._revisions[revision.locator] = revision
        return self

    def with_dependencies(
        self, revision_locator: str, dependencies: list[Dependency]
    ) -> "MockState":
        with self.lock.write():
            self._dependencies[revision_locator] = list(dependencies)
        return self

    def with_issue(self, issue: Issue) -> "MockState":
        with self.lock.write():
            self._issues[issue.id] = issue
        return self

    def with_required_token(self, token: Optional[str]) -> "MockState":
        with self.lock.write():
            self._required_token = token
        return self

    # reading

    @property
    def required_token(self) -> Optional[str]:
        with self.lock.read():
            return self._required_token

    def get_project(self, locator: str) -> Optional[Project]:
        with self.lock.read():
            return self._projects.get(locator)

    def get_revision(self, locator: str) -> Optional[Revision]:
        with self.lock.read():
            return self._revisions.get(locator)

    def get_issue(self, id: int) -> Optional[Issue]:
        with self.lock.read():
            return self._issues.get(id)

    def get_dependencies(self, revision_locator: str) -> list[Dependency]:
        """The dependencies of a revision; empty if none were recorded.

        An unknown revision also gives an empty list.
        """
        with self.lock.read():
            return list(self._dependencies.get(revision_locator, []))

    def list_projects(self, title: Optional[str] = None) -> list[Project]:
        """Projects whose title contains 'title', ignoring case"""
        with self.lock.read():
            projects = list(self._projects.values())
        if title is None:
            return projects
        needle = title.lower()
        return [x for x in projects if needle in x.title.lower()]

    def list_revisions_for_project(self, project_locator: str) -> list[Revision]:
        with self.lock.read():
            revisions = list(self._revisions.values())
        return [x for x in revisions if belongs_to(x.locator, project_locator)]

    def list_issues(self, category: Optional[str] = None) -> list[Issue]:
        """Issues of the given type (ignoring case), or all issues"""
        with self.lock.read():
            issues = list(self._issues.values())
        if category is None:
            return issues
        return [x for x in issues if x.issue_type.lower() == category.lower()]

    # writing

    def update_project(
        self,
        locator: str,
        title: Optional[str] = None,
        url: Optional[str] = None,
        public: Optional[bool] = None,
    ) -> Optional[Project]:
        """Overwrite the given fields of a project; other fields stay as they are.

        Returns None if there is no project at 'locator'.
        """
        changes = {
            k: v
            for (k, v) in (("title", title), ("url", url), ("public", public))
            if v is not None
        }
        with self.lock.write():
            project = self._projects.get(locator)
            if project is None:
                return None
            if changes:
                project = project.update(**changes)
                self._projects[locator] = project
            return project
