# (c) Nelen & Schuurmans

from fossa_client import revision_locator
from fossa_client import ValueObject
from fossa_client.models import Dependency
from fossa_client.models import Issue
from fossa_client.models import IssueCategory
from fossa_client.models import IssueDepths
from fossa_client.models import IssueSource
from fossa_client.models import IssueStatuses
from fossa_client.models import LatestRevision
from fossa_client.models import Project
from fossa_client.models import ProjectIssues
from fossa_client.models import Revision

__all__ = ["Fixtures", "Scenario"]


class Scenario(ValueObject):
    """A consistent set of related entities"""

    projects: list[Project] = []
    revisions: list[Revision] = []
    dependencies: dict[str, list[Dependency]] = {}
    issues: list[Issue] = []


class Fixtures:
    """Factories for realistic test data"""

    # projects

    @staticmethod
    def minimal_project(locator: str, title: str) -> Project:
        return Project(id=locator, title=title)

    @staticmethod
    def project_with_issues(
        locator: str, title: str, vulnerability: int, licensing: int, quality: int
    ) -> Project:
        return Project(
            id=locator,
            title=title,
            issues=ProjectIssues(
                total=vulnerability + licensing + quality,
                licensing=licensing,
                security=vulnerability,
                quality=quality,
            ),
        )

    @staticmethod
    def analyzed_project(locator: str, title: str, branch: str) -> Project:
        return Project(
            id=locator,
            title=title,
            branch=branch,
            latest_revision=LatestRevision(
                locator=revision_locator(locator, branch), message="Latest analysis"
            ),
            latest_build_status="SUCCEEDED",
        )

    # revisions

    @staticmethod
    def minimal_revision(locator: str) -> Revision:
        return Revision(locator=locator, resolved=True)

    @staticmethod
    def resolved_revision(locator: str, source_type: str) -> Revision:
        return Revision(
            locator=locator, resolved=True, source_type=source_type, source="cli"
        )

    # dependencies

    @staticmethod
    def minimal_dependency(locator: str, depth: int) -> Dependency:
        return Dependency(locator=locator, depth=depth)

    @staticmethod
    def npm_dependency(name: str, version: str, depth: int) -> Dependency:
        return Dependency(
            locator=f"npm+{name}${version}", title=name, version=version, depth=depth
        )

    # issues

    @staticmethod
    def vulnerability_issue(
        id: int, cve: str, severity: str, package_locator: str
    ) -> Issue:
        return Issue(
            id=id,
            issue_type=IssueCategory.VULNERABILITY.value,
            source=IssueSource(id=package_locator),
            depths=IssueDepths(direct=1, deep=0),
            statuses=IssueStatuses(active=1, ignored=0),
            cve=cve,
            cvss=7.5,
            severity=severity,
            details=f"Vulnerability {cve} in package",
            vuln_id=f"{cve}_{package_locator}",
            title=f"{cve} Vulnerability",
        )

    @staticmethod
    def licensing_issue(id: int, license: str, package_locator: str) -> Issue:
        return Issue(
            id=id,
            issue_type=IssueCategory.LICENSING.value,
            source=IssueSource(id=package_locator),
            depths=IssueDepths(direct=0, deep=1),
            statuses=IssueStatuses(active=1, ignored=0),
            license=license,
        )

    @staticmethod
    def quality_issue(id: int, title: str, package_locator: str) -> Issue:
        return Issue(
            id=id,
            issue_type=IssueCategory.QUALITY.value,
            source=IssueSource(id=package_locator),
            depths=IssueDepths(direct=1, deep=0),
            statuses=IssueStatuses(active=1, ignored=0),
            title=title,
        )

    # scenarios

    @classmethod
    def default_scenario(cls) -> Scenario:
        """One analyzed npm project with three dependencies and two issues"""
        project = "custom+1/test-project"
        revision = revision_locator(project, "main")
        return Scenario(
            projects=[cls.analyzed_project(project, "Test Project", "main")],
            revisions=[cls.resolved_revision(revision, "npm")],
            dependencies={
                revision: [
                    cls.npm_dependency("lodash", "4.17.21", 1),
                    cls.npm_dependency("express", "4.18.0", 1),
                    cls.npm_dependency("accepts", "1.3.8", 2),
                ]
            },
            issues=[
                cls.vulnerability_issue(1, "CVE-2024-0001", "high", "npm+lodash$4.17.21"),
                cls.licensing_issue(2, "GPL-3.0", "npm+gpl-package$1.0.0"),
            ],
        )
