from http import HTTPStatus
from unittest import mock

import pytest

from fossa_client import DoesNotExist
from fossa_client import Project
from fossa_client import ProjectListQuery
from fossa_client import ProjectUpdate
from fossa_client.api_client import ApiException
from fossa_client.api_client import ApiProvider
from fossa_client.api_client import MalformedResponse
from fossa_client.repositories import ProjectRepository


@pytest.fixture
def provider():
    return mock.MagicMock(spec_set=ApiProvider)


@pytest.fixture
def repo(provider):
    return ProjectRepository(provider)


def project_json(n: int):
    return {"id": f"custom+1/project-{n}", "title": f"Project {n}"}


async def test_get(repo, provider):
    provider.request.return_value = project_json(1)

    actual = await repo.get("custom+1/project-1")

    assert actual == Project(id="custom+1/project-1", title="Project 1")
    provider.request.assert_awaited_once_with(
        "GET", "projects/custom%2B1%2Fproject-1", params=None
    )


async def test_get_does_not_exist(repo, provider):
    provider.request.side_effect = ApiException({}, status=HTTPStatus.NOT_FOUND)

    with pytest.raises(DoesNotExist) as e:
        await repo.get("custom+1/nope")

    assert e.value.id == "custom+1/nope"


async def test_get_malformed(repo, provider):
    provider.request.return_value = {"id": "custom+1/project-1"}  # no title

    with pytest.raises(MalformedResponse):
        await repo.get("custom+1/project-1")


async def test_list_page(repo, provider):
    provider.request.return_value = {
        "projects": [project_json(1), project_json(2)],
        "total": 3,
    }

    actual = await repo.list_page(ProjectListQuery(title="proj"), 1, 2)

    provider.request.assert_awaited_once_with(
        "GET", "v2/projects", params={"title": "proj", "page": 1, "count": 2}
    )
    assert [x.title for x in actual.items] == ["Project 1", "Project 2"]
    assert actual.total == 3
    assert actual.has_more is True


async def test_list_page_empty(repo, provider):
    provider.request.return_value = {"projects": [], "total": 0}

    actual = await repo.list_page(ProjectListQuery(), 1, 20)

    assert actual.is_empty()
    assert actual.has_more is False


@pytest.mark.parametrize(
    "body",
    [
        {"total": 2},
        {"projects": {"a": 1}, "total": 2},
        {"projects": [], "total": "2"},
        {"projects": [{"title": "no id"}], "total": 1},
    ],
)
async def test_list_page_malformed(repo, provider, body):
    provider.request.return_value = body

    with pytest.raises(MalformedResponse):
        await repo.list_page(ProjectListQuery(), 1, 20)


async def test_list_page_not_an_object(repo, provider):
    provider.request.return_value = None

    with pytest.raises(MalformedResponse):
        await repo.list_page(ProjectListQuery(), 1, 20)


async def test_list_all(repo, provider):
    provider.request.side_effect = [
        {"projects": [project_json(i) for i in range(100)], "total": 150},
        {"projects": [project_json(i) for i in range(100, 150)], "total": 150},
    ]

    actual = await repo.list_all(ProjectListQuery())

    assert len(actual) == 150
    assert provider.request.await_args_list[1] == mock.call(
        "GET", "v2/projects", params={"page": 2, "count": 100}
    )


async def test_update(repo, provider):
    provider.request.return_value = {**project_json(1), "title": "New"}

    actual = await repo.update("custom+1/project-1", ProjectUpdate(title="New"))

    assert actual.title == "New"
    provider.request.assert_awaited_once_with(
        "PUT", "projects/custom%2B1%2Fproject-1", json={"title": "New"}
    )


async def test_update_from_dict(repo, provider):
    provider.request.return_value = project_json(1)

    await repo.update("custom+1/project-1", {"public": False, "url": None})

    provider.request.assert_awaited_once_with(
        "PUT", "projects/custom%2B1%2Fproject-1", json={"public": False}
    )


async def test_update_nothing_gets(repo, provider):
    provider.request.return_value = project_json(1)

    await repo.update("custom+1/project-1", ProjectUpdate())

    provider.request.assert_awaited_once_with(
        "GET", "projects/custom%2B1%2Fproject-1", params=None
    )


async def test_update_does_not_exist(repo, provider):
    provider.request.side_effect = ApiException({}, status=HTTPStatus.NOT_FOUND)

    with pytest.raises(DoesNotExist):
        await repo.update("custom+1/nope", ProjectUpdate(title="x"))
