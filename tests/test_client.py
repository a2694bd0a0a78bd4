import pytest

from fossa_client import ConfigurationError
from fossa_client import Dialect
from fossa_client import FossaClient
from fossa_client import FossaConfig
from fossa_client.client import DEFAULT_API_URL


def test_from_env_minimal():
    actual = FossaConfig.from_env({"FOSSA_API_KEY": "secret"})

    assert actual.api_key == "secret"
    assert actual.api_url == DEFAULT_API_URL
    assert actual.issue_dialect is Dialect.UNCOUNTED
    assert actual.revision_dialect is Dialect.GROUPED


def test_from_env_all():
    actual = FossaConfig.from_env(
        {
            "FOSSA_API_KEY": "secret",
            "FOSSA_API_URL": "http://localhost:8000/",
            "FOSSA_ISSUE_DIALECT": "Counted",
            "FOSSA_REVISION_DIALECT": " counted ",
        }
    )

    assert actual.api_url == "http://localhost:8000/"
    assert actual.issue_dialect is Dialect.COUNTED
    assert actual.revision_dialect is Dialect.COUNTED


@pytest.mark.parametrize("environ", [{}, {"FOSSA_API_KEY": ""}])
def test_from_env_no_key(environ):
    with pytest.raises(ConfigurationError) as e:
        FossaConfig.from_env(environ)

    assert e.value.setting == "FOSSA_API_KEY"


def test_from_env_bad_dialect():
    with pytest.raises(ConfigurationError) as e:
        FossaConfig.from_env({"FOSSA_API_KEY": "x", "FOSSA_ISSUE_DIALECT": "paged"})

    assert e.value.setting == "FOSSA_ISSUE_DIALECT"
    assert "counted, uncounted, grouped" in str(e.value)


def test_from_env_uses_os_environ(monkeypatch):
    monkeypatch.setenv("FOSSA_API_KEY", "from-os")
    monkeypatch.delenv("FOSSA_API_URL", raising=False)

    assert FossaConfig.from_env().api_key == "from-os"


def test_api_key_not_in_repr():
    assert "secret" not in repr(FossaConfig(api_key="secret"))


def test_client_repositories():
    client = FossaClient(
        FossaConfig(
            api_key="x",
            api_url="http://localhost/",
            issue_dialect=Dialect.COUNTED,
            revision_dialect=Dialect.COUNTED,
        )
    )

    assert client.issues.dialect is Dialect.COUNTED
    assert client.revisions.dialect is Dialect.COUNTED
    for repo in (client.projects, client.revisions, client.dependencies, client.issues):
        assert repo.provider is client.provider


def test_client_rejects_unsupported_dialect():
    with pytest.raises(ValueError):
        FossaClient(FossaConfig(api_key="x", issue_dialect=Dialect.GROUPED))


async def test_headers():
    client = FossaClient(FossaConfig(api_key="secret"))

    assert await client._headers() == {
        "Authorization": "Bearer secret",
        "Accept": "application/json",
    }


async def test_context_manager():
    client = FossaClient(FossaConfig(api_key="secret"))

    async with client as entered:
        assert entered is client
        assert client.provider._session is not None

    assert client.provider._session is None
