from fossa_client import encode_locator
from fossa_client import Page
from fossa_client.models import Dependency
from fossa_client.models import DependencyListQuery

from .api_repository import ApiListRepository

__all__ = ["DependencyRepository"]


class DependencyRepository(ApiListRepository[Dependency, DependencyListQuery]):
    """Dependencies of one revision"""

    async def list_page(
        self, query: DependencyListQuery, page: int, count: int
    ) -> Page[Dependency]:
        path = f"v2/revisions/{encode_locator(query.revision)}/dependencies"
        body = await self._request_body(
            path, {**query.as_params(), "page": page, "count": count}
        )
        # in this endpoint 'count' is the total amount of dependencies
        return Page(
            items=self._parse_list(path, body, "dependencies"),
            total=self._parse_total(path, body, "count"),
            page=page,
            count=count,
        )
