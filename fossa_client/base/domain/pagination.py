# (c) Nelen & Schuurmans

import logging
from collections.abc import Callable
from collections.abc import Sequence
from enum import Enum
from typing import Generic
from typing import Protocol
from typing import TypeVar

from pydantic import BaseModel
from pydantic import computed_field
from pydantic import ConfigDict
from pydantic import Field

from .value_object import ValueObject

__all__ = [
    "Page",
    "PageOptions",
    "Dialect",
    "Listable",
    "list_all",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGES",
]

logger = logging.getLogger(__name__)

# Page size used by list_all
DEFAULT_PAGE_SIZE = 100

# Safety limit for list_all against servers that never run out of pages
MAX_PAGES = 1000

T = TypeVar("T")
U = TypeVar("U")
Q = TypeVar("Q")
T_co = TypeVar("T_co", covariant=True)
Q_contra = TypeVar("Q_contra", contravariant=True)


class Dialect(str, Enum):
    """The shape in which a list endpoint returns its results.

    - COUNTED: one page of items plus the total number of items.
    - UNCOUNTED: one page of items; more pages are assumed after a full page.
    - GROUPED: all items at once, grouped by a secondary key (e.g. the branch).
    """

    COUNTED = "counted"
    UNCOUNTED = "uncounted"
    GROUPED = "grouped"


class PageOptions(ValueObject):
    page: int = Field(1, ge=1)
    count: int = Field(ge=1)

    @classmethod
    def for_page(cls, page: int, count: int) -> "PageOptions":
        return cls(page=page, count=count)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.count

    def apply(self, items: Sequence[T]) -> list[T]:
        """Return the slice of 'items' that is on this page.

        A page beyond the end of 'items' is empty.
        """
        return list(items[self.offset : self.offset + self.count])


class Page(BaseModel, Generic[T]):
    """One slice of a listing.

    'page' and 'count' are the requested page number and page size. The
    amount of items may differ from 'count'. 'has_more' is derived from the
    other fields and cannot be set.
    """

    model_config = ConfigDict(frozen=True)

    items: Sequence[T]
    total: int | None = None
    page: int
    count: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_more(self) -> bool:
        if self.total is not None:
            return self.page * self.count < self.total
        # without a total, a full page is taken as a sign that there is more
        return len(self.items) >= self.count

    def is_empty(self) -> bool:
        return len(self.items) == 0

    def map(self, func: Callable[[T], U]) -> "Page[U]":
        return Page(
            items=[func(x) for x in self.items],
            total=self.total,
            page=self.page,
            count=self.count,
        )


class Listable(Protocol[T_co, Q_contra]):
    """Anything that can return page N (of size C) of a listing.

    The query is resource specific: list_all passes it on untouched.
    """

    async def list_page(
        self, query: Q_contra, page: int, count: int
    ) -> Page[T_co]: ...


async def list_all(source: Listable[T, Q], query: Q) -> list[T]:
    """Fetch all pages of a listing, one after the other.

    Stops after a page that says there is nothing more, after a page that
    contains fewer items than requested or after MAX_PAGES pages. In the
    last case the result may be incomplete; this is logged, not raised.
    Exceptions from 'list_page' propagate immediately.
    """
    result: list[T] = []
    page = 1
    while True:
        current = await source.list_page(query, page, DEFAULT_PAGE_SIZE)
        logger.debug(
            "fetched page %d with %d items (total=%s)",
            page,
            len(current.items),
            current.total,
        )
        result.extend(current.items)
        if not current.has_more or len(current.items) < DEFAULT_PAGE_SIZE:
            break
        page += 1
        if page > MAX_PAGES:
            logger.warning(
                "Reached pagination limit of %d pages, stopping", MAX_PAGES
            )
            break
    return result
