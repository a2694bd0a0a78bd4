# (c) Nelen & Schuurmans

import pytest

from fossa_client import FossaClient
from fossa_client import FossaConfig
from fossa_client.mock_server import Fixtures
from fossa_client.mock_server import MockServer
from fossa_client.mock_server import MockState


@pytest.fixture
def state() -> MockState:
    return MockState.from_scenario(Fixtures.default_scenario())


@pytest.fixture
def mock_server(state):
    with MockServer(state) as server:
        yield server


@pytest.fixture
def config(mock_server) -> FossaConfig:
    return FossaConfig(api_key="secret", api_url=mock_server.url, retries=0)


@pytest.fixture
async def client(config):
    async with FossaClient(config) as client:
        yield client
