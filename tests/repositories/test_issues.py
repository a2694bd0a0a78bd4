from http import HTTPStatus
from unittest import mock

import pytest

from fossa_client import Dialect
from fossa_client import DoesNotExist
from fossa_client import IssueCategory
from fossa_client import IssueListQuery
from fossa_client.api_client import ApiException
from fossa_client.api_client import ApiProvider
from fossa_client.repositories import IssueRepository


@pytest.fixture
def provider():
    return mock.MagicMock(spec_set=ApiProvider)


def issue(n):
    return {"id": n, "type": "vulnerability", "source": {"id": "npm+x$1"}}


async def test_uncounted(provider):
    provider.request.return_value = {"issues": [issue(1), issue(2)], "total": 99}
    repo = IssueRepository(provider)

    actual = await repo.list_page(
        IssueListQuery(category=IssueCategory.VULNERABILITY), 1, 2
    )

    provider.request.assert_awaited_once_with(
        "GET", "v2/issues", params={"category": "vulnerability", "page": 1, "count": 2}
    )
    # a total in the body is ignored in this dialect
    assert actual.total is None
    assert actual.has_more is True


async def test_uncounted_short_page(provider):
    provider.request.return_value = {"issues": [issue(1)]}
    repo = IssueRepository(provider)

    actual = await repo.list_page(IssueListQuery(), 1, 2)

    assert actual.has_more is False


async def test_counted(provider):
    provider.request.return_value = {"issues": [issue(1), issue(2)], "total": 2}
    repo = IssueRepository(provider, dialect=Dialect.COUNTED)

    actual = await repo.list_page(IssueListQuery(), 1, 2)

    assert actual.total == 2
    assert actual.has_more is False


async def test_grouped_not_supported(provider):
    with pytest.raises(ValueError):
        IssueRepository(provider, dialect=Dialect.GROUPED)


async def test_list_all_uncounted(provider):
    provider.request.side_effect = [
        {"issues": [issue(i) for i in range(100)]},
        {"issues": []},
    ]
    repo = IssueRepository(provider)

    actual = await repo.list_all(IssueListQuery())

    assert len(actual) == 100
    assert provider.request.await_count == 2


async def test_get(provider):
    provider.request.return_value = issue(1)
    repo = IssueRepository(provider)

    actual = await repo.get(1, IssueCategory.VULNERABILITY)

    assert actual.id == 1
    provider.request.assert_awaited_once_with(
        "GET", "v2/issues/1", params={"category": "vulnerability"}
    )


async def test_get_category_as_str(provider):
    provider.request.return_value = issue(1)
    repo = IssueRepository(provider)

    await repo.get(1, "licensing")

    assert provider.request.await_args.kwargs["params"] == {"category": "licensing"}


async def test_get_does_not_exist(provider):
    provider.request.side_effect = ApiException({}, status=HTTPStatus.NOT_FOUND)
    repo = IssueRepository(provider)

    with pytest.raises(DoesNotExist):
        await repo.get(3, IssueCategory.QUALITY)
