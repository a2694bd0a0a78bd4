# (c) Nelen & Schuurmans

from fastapi import Query

from fossa_client import PageOptions
from fossa_client import ValueObject

__all__ = ["ListQuery"]


class ListQuery(ValueObject):
    """This class standardizes pagination for list endpoints.

    Subclass it to add filters or to change the default page size. Field
    names are exposed as camelCase query parameters. Example usage in a
    Resource:

        @get("/books")
        def list_books(self, q: Annotated[ListQuery, Query()]):
            return self.paginate(q.as_page_options())
    """

    page: int = Query(1, ge=1, description="Page number, starting at 1")
    count: int = Query(20, ge=1, description="Page size")

    def as_page_options(self) -> PageOptions:
        return PageOptions(page=self.page, count=self.count)
