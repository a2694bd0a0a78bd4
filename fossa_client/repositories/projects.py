from fossa_client import Json
from fossa_client import Page
from fossa_client.api_client import ApiGateway
from fossa_client.models import Project
from fossa_client.models import ProjectListQuery
from fossa_client.models import ProjectUpdate

from .api_repository import ApiRepository

__all__ = ["ProjectGateway", "ProjectRepository"]


class ProjectGateway(ApiGateway, path="projects/{id}", name="project"):
    pass


class ProjectRepository(
    ApiRepository[Project, ProjectListQuery], gateway=ProjectGateway
):
    list_path = "v2/projects"

    async def list_page(
        self, query: ProjectListQuery, page: int, count: int
    ) -> Page[Project]:
        body = await self._request_body(
            self.list_path, {**query.as_params(), "page": page, "count": count}
        )
        return Page(
            items=self._parse_list(self.list_path, body, "projects"),
            total=self._parse_total(self.list_path, body, "total"),
            page=page,
            count=count,
        )

    async def update(self, locator: str, values: ProjectUpdate | Json) -> Project:
        """Change only the given fields of a project.

        Raises DoesNotExist if there is no project at 'locator'.
        """
        if isinstance(values, dict):
            values = ProjectUpdate(**values)
        payload = values.model_dump(by_alias=True, exclude_none=True)
        if not payload:
            return await self.get(locator)
        result = await self.gateway.update(locator, payload)
        return self._parse(self.gateway.url_path(locator), result)
