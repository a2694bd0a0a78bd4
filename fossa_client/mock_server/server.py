# (c) Nelen & Schuurmans

import logging
import socket
import threading
import time
from typing import Optional

import uvicorn
from fastapi import Depends
from fastapi import FastAPI

from fossa_client import Dialect
from fossa_client import Json
from fossa_client.fastapi import BearerTokenSchema
from fossa_client.fastapi import Service
from fossa_client.fastapi import v

from .fixtures import Fixtures
from .presentation import DependencyResource
from .presentation import GroupedRevisionResource
from .presentation import IssueResource
from .presentation import ProjectListResource
from .presentation import ProjectResource
from .presentation import RevisionListResource
from .presentation import RevisionResource
from .state import MockState

__all__ = ["AccessLog", "MockServer", "create_app"]

logger = logging.getLogger(__name__)

HOST = "127.0.0.1"


class AccessLog:
    """The requests handled by the server, oldest first"""

    def __init__(self):
        self._lock = threading.Lock()
        self._items: list[Json] = []

    def add(self, item: Json) -> None:
        with self._lock:
            self._items.append(item)

    @property
    def entries(self) -> list[Json]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def create_app(
    state: MockState,
    issue_dialect: Dialect = Dialect.UNCOUNTED,
    access_log: Optional[AccessLog] = None,
) -> FastAPI:
    """The mock API as an ASGI app.

    Resources are registered in this order because a path parameter may
    contain slashes: '/projects/{locator}/revisions' has to come before
    '/projects/{locator}'.
    """
    service = Service(
        GroupedRevisionResource(state),
        ProjectResource(state),
        RevisionResource(state),
        ProjectListResource(state),
        RevisionListResource(state),
        DependencyResource(state),
        RevisionResource.with_version(v(2))(state),
        IssueResource(state, dialect=issue_dialect),
    )
    return service.create_app(
        title="Mock FOSSA API",
        description="In-memory imitation of the FOSSA API for tests",
        access_logger_gateway=access_log,
        dependencies=[Depends(BearerTokenSchema(lambda: state.required_token))],
    )


class MockServer:
    """Serves the mock API over HTTP from a background thread.

    Listens on 127.0.0.1 at a random free port. Use as a context manager or
    call 'shutdown' when done::

        with MockServer.start() as server:
            client = FossaClient(FossaConfig(api_key="x", api_url=server.url))
    """

    def __init__(
        self, state: MockState, issue_dialect: Dialect = Dialect.UNCOUNTED
    ):
        self.state = state
        self.issue_dialect = issue_dialect
        self.access_log = AccessLog()
        self.app = create_app(state, issue_dialect, access_log=self.access_log)
        self._socket: Optional[socket.socket] = None
        self._port: Optional[int] = None
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def start(cls, issue_dialect: Dialect = Dialect.UNCOUNTED) -> "MockServer":
        """Serve the default scenario"""
        state = MockState.from_scenario(Fixtures.default_scenario())
        return cls(state, issue_dialect).serve()

    @classmethod
    def start_empty(
        cls, issue_dialect: Dialect = Dialect.UNCOUNTED
    ) -> "MockServer":
        return cls(MockState(), issue_dialect).serve()

    @classmethod
    def with_state(
        cls, state: MockState, issue_dialect: Dialect = Dialect.UNCOUNTED
    ) -> "MockServer":
        return cls(state, issue_dialect).serve()

    @property
    def port(self) -> int:
        assert self._port is not None, "server was never started"
        return self._port

    @property
    def url(self) -> str:
        return f"http://{HOST}:{self.port}/"

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def serve(self, timeout: float = 10.0) -> "MockServer":
        """Start serving and return once the server accepts requests"""
        if self._thread is not None:
            return self
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((HOST, 0))
        self._socket = sock
        self._port = sock.getsockname()[1]
        config = uvicorn.Config(self.app, log_level="warning", lifespan="off")
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._server.run,
            kwargs={"sockets": [sock]},
            name="mock-fossa-server",
            daemon=True,
        )
        self._thread.start()
        deadline = time.monotonic() + timeout
        while not self._server.started:
            if not self._thread.is_alive() or time.monotonic() > deadline:
                self.shutdown()
                raise RuntimeError("mock server did not start")
            time.sleep(0.01)
        logger.info("mock server listening at %s", self.url)
        return self

    def shutdown(self, timeout: float = 10.0) -> None:
        """Stop serving. Calling this more than once is harmless."""
        if self._thread is None:
            return
        assert self._server is not None
        self._server.should_exit = True
        self._thread.join(timeout)
        if self._socket is not None:
            self._socket.close()
            self._socket = None
        logger.info("mock server stopped")
        self._thread = None
        self._server = None

    def __enter__(self) -> "MockServer":
        return self.serve()

    def __exit__(self, *args) -> None:
        self.shutdown()
