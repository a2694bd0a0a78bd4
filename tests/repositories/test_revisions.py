from unittest import mock

import pytest

from fossa_client import Dialect
from fossa_client import RevisionListQuery
from fossa_client.api_client import ApiProvider
from fossa_client.api_client import MalformedResponse
from fossa_client.repositories import RevisionRepository

PROJECT = "custom+1/foo"


def rev(ref, created_at=None):
    result = {"locator": f"{PROJECT}${ref}"}
    if created_at is not None:
        result["createdAt"] = created_at
    return result


@pytest.fixture
def provider():
    return mock.MagicMock(spec_set=ApiProvider)


@pytest.fixture
def grouped(provider):
    provider.request.return_value = {
        "main": [rev("main", "2024-01-01T00:00:00Z")],
        "dev": [
            rev("dev", "2024-03-01T00:00:00Z"),
            rev("dev-undated"),
            rev("dev-same-1", "2024-02-01T00:00:00Z"),
            rev("dev-same-2", "2024-02-01T00:00:00Z"),
        ],
    }
    return RevisionRepository(provider)


def refs(page):
    return [x.ref for x in page.items]


async def test_grouped_is_default(provider):
    assert RevisionRepository(provider).dialect is Dialect.GROUPED


async def test_uncounted_not_supported(provider):
    with pytest.raises(ValueError):
        RevisionRepository(provider, dialect=Dialect.UNCOUNTED)


async def test_grouped_request(grouped, provider):
    await grouped.list_page(RevisionListQuery(project=PROJECT), 1, 10)

    provider.request.assert_awaited_once_with(
        "GET", "projects/custom%2B1%2Ffoo/revisions", params=None
    )


async def test_grouped_flatten_and_sort(grouped):
    actual = await grouped.list_page(RevisionListQuery(project=PROJECT), 1, 10)

    assert refs(actual) == ["dev", "dev-same-1", "dev-same-2", "main", "dev-undated"]
    assert actual.total == 5
    assert actual.has_more is False


async def test_grouped_local_pagination(grouped):
    query = RevisionListQuery(project=PROJECT)

    first = await grouped.list_page(query, 1, 2)
    second = await grouped.list_page(query, 2, 2)
    third = await grouped.list_page(query, 3, 2)
    beyond = await grouped.list_page(query, 4, 2)

    assert refs(first) == ["dev", "dev-same-1"]
    assert refs(second) == ["dev-same-2", "main"]
    assert refs(third) == ["dev-undated"]
    assert refs(beyond) == []
    assert (first.has_more, second.has_more, third.has_more) == (True, True, False)
    assert beyond.total == 5


async def test_grouped_stable(grouped):
    query = RevisionListQuery(project=PROJECT)
    pages = [await grouped.list_page(query, 1, 10) for _ in range(3)]
    assert refs(pages[0]) == refs(pages[1]) == refs(pages[2])


async def test_grouped_branch_filter(grouped):
    actual = await grouped.list_page(
        RevisionListQuery(project=PROJECT, branch="main"), 1, 10
    )

    assert refs(actual) == ["main"]
    assert actual.total == 1


async def test_grouped_list_all(grouped):
    actual = await grouped.list_all(RevisionListQuery(project=PROJECT))
    assert len(actual) == 5


async def test_grouped_malformed(provider):
    provider.request.return_value = {"main": {"locator": "x"}}
    repo = RevisionRepository(provider)

    with pytest.raises(MalformedResponse):
        await repo.list_page(RevisionListQuery(project=PROJECT), 1, 10)


async def test_counted(provider):
    provider.request.return_value = {"revisions": [rev("main")], "total": 7}
    repo = RevisionRepository(provider, dialect=Dialect.COUNTED)

    actual = await repo.list_page(RevisionListQuery(project=PROJECT, branch="x"), 2, 3)

    provider.request.assert_awaited_once_with(
        "GET",
        "v2/projects/custom%2B1%2Ffoo/revisions",
        params={"branch": "x", "page": 2, "count": 3},
    )
    assert refs(actual) == ["main"]
    assert actual.total == 7
    assert actual.has_more is True


async def test_get(provider):
    provider.request.return_value = rev("main")
    repo = RevisionRepository(provider)

    actual = await repo.get(f"{PROJECT}$main")

    assert actual.locator == f"{PROJECT}$main"
    provider.request.assert_awaited_once_with(
        "GET", "v2/revisions/custom%2B1%2Ffoo%24main", params=None
    )


@pytest.mark.parametrize("page,count", [(0, 10), (-1, 10), (1, 0)])
async def test_grouped_out_of_range(grouped, page, count):
    actual = await grouped.list_page(RevisionListQuery(project=PROJECT), page, count)

    assert refs(actual) == []
    assert actual.total == 5
