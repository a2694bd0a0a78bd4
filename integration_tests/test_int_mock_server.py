import threading
import time
from urllib.request import Request
from urllib.request import urlopen

import pytest

from fossa_client.mock_server import MockServer


def test_start_and_shutdown():
    server = MockServer.start()

    assert server.is_running
    assert server.url == f"http://127.0.0.1:{server.port}/"
    with urlopen(server.url + "health") as response:
        assert response.status == 200

    server.shutdown()
    assert not server.is_running
    server.shutdown()  # twice is fine


def test_start_empty():
    with MockServer.start_empty() as server:
        with urlopen(server.url + "v2/projects") as response:
            assert response.read() == b'{"projects":[],"total":0}'


def test_servers_get_own_ports():
    with MockServer.start_empty() as first, MockServer.start_empty() as second:
        assert first.port != second.port


def test_port_before_start(state):
    with pytest.raises(AssertionError):
        MockServer(state).port


def test_serve_twice(mock_server):
    port = mock_server.port

    assert mock_server.serve() is mock_server
    assert mock_server.port == port


def test_health_while_a_request_waits_for_the_state(state):
    state.with_required_token("secret")

    with MockServer(state) as server:
        request = Request(
            server.url + "v2/projects", headers={"Authorization": "Bearer secret"}
        )
        waiting = threading.Thread(target=lambda: urlopen(request, timeout=5).read())
        with state.lock.write():
            waiting.start()
            time.sleep(0.2)
            with urlopen(server.url + "health", timeout=2) as response:
                assert response.status == 200
        waiting.join(5)
