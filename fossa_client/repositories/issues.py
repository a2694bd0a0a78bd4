from fossa_client import Dialect
from fossa_client import Page
from fossa_client.api_client import ApiGateway
from fossa_client.api_client import ApiProvider
from fossa_client.models import Issue
from fossa_client.models import IssueCategory
from fossa_client.models import IssueListQuery

from .api_repository import ApiRepository

__all__ = ["IssueGateway", "IssueRepository"]


class IssueGateway(ApiGateway, path="v2/issues/{id}", name="issue"):
    pass


class IssueRepository(ApiRepository[Issue, IssueListQuery], gateway=IssueGateway):
    """Issues, listed in the UNCOUNTED (default) or COUNTED dialect.

    In the UNCOUNTED dialect there is no total: a full page is taken as a sign
    that there are more pages.
    """

    list_path = "v2/issues"

    def __init__(
        self,
        provider_override: ApiProvider | None = None,
        dialect: Dialect = Dialect.UNCOUNTED,
    ):
        if dialect is Dialect.GROUPED:
            raise ValueError("issues are not available in the grouped dialect")
        super().__init__(provider_override)
        self.dialect = dialect

    async def get(  # type: ignore[override]
        self, id: int, category: IssueCategory | str
    ) -> Issue:
        """The API needs the category of an issue to find it"""
        return await super().get(
            id, params={"category": IssueCategory(category).value}
        )

    async def list_page(
        self, query: IssueListQuery, page: int, count: int
    ) -> Page[Issue]:
        body = await self._request_body(
            self.list_path, {**query.as_params(), "page": page, "count": count}
        )
        if self.dialect is Dialect.COUNTED:
            total = self._parse_total(self.list_path, body, "total")
        else:
            total = None
        return Page(
            items=self._parse_list(self.list_path, body, "issues"),
            total=total,
            page=page,
            count=count,
        )
