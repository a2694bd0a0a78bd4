from fossa_client import Dialect
from fossa_client import encode_locator
from fossa_client import Json
from fossa_client import Page
from fossa_client import PageOptions
from fossa_client.api_client import ApiGateway
from fossa_client.api_client import ApiProvider
from fossa_client.api_client import MalformedResponse
from fossa_client.models import newest_first
from fossa_client.models import Revision
from fossa_client.models import RevisionListQuery

from .api_repository import ApiRepository

__all__ = ["RevisionGateway", "RevisionRepository"]


class RevisionGateway(ApiGateway, path="v2/revisions/{id}", name="revision"):
    pass


class RevisionRepository(
    ApiRepository[Revision, RevisionListQuery], gateway=RevisionGateway
):
    """Revisions of one project.

    The GROUPED dialect gets all revisions of a project at once, grouped by
    ref, and paginates locally. The COUNTED dialect lets the API paginate.
    """

    def __init__(
        self,
        provider_override: ApiProvider | None = None,
        dialect: Dialect = Dialect.GROUPED,
    ):
        if dialect is Dialect.UNCOUNTED:
            raise ValueError("revisions are not available in the uncounted dialect")
        super().__init__(provider_override)
        self.dialect = dialect

    async def list_page(
        self, query: RevisionListQuery, page: int, count: int
    ) -> Page[Revision]:
        if self.dialect is Dialect.GROUPED:
            return await self._list_page_grouped(query, page, count)
        return await self._list_page_counted(query, page, count)

    async def _list_page_counted(
        self, query: RevisionListQuery, page: int, count: int
    ) -> Page[Revision]:
        path = f"v2/projects/{encode_locator(query.project)}/revisions"
        body = await self._request_body(
            path, {**query.as_params(), "page": page, "count": count}
        )
        return Page(
            items=self._parse_list(path, body, "revisions"),
            total=self._parse_total(path, body, "total"),
            page=page,
            count=count,
        )

    async def _list_page_grouped(
        self, query: RevisionListQuery, page: int, count: int
    ) -> Page[Revision]:
        path = f"projects/{encode_locator(query.project)}/revisions"
        body = await self._request_body(path)
        revisions = self._flatten(path, body, query.branch)
        # page and count are not validated: out of range gives an empty page
        if page < 1 or count < 1:
            items: list[Revision] = []
        else:
            items = PageOptions.for_page(page, count).apply(revisions)
        return Page(
            items=items,
            total=len(revisions),
            page=page,
            count=count,
        )

    def _flatten(self, path: str, body: Json, branch: str | None) -> list[Revision]:
        result: list[Revision] = []
        for ref, bucket in body.items():
            if branch is not None and ref != branch:
                continue
            if not isinstance(bucket, list):
                raise MalformedResponse(path, f"expected a list at '{ref}'")
            result.extend(self._parse(path, x) for x in bucket)
        return newest_first(result)
