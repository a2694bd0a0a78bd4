from unittest import mock

import pytest
from fastapi.routing import APIRoute
from starlette.requests import Request
from starlette.responses import JSONResponse

from fossa_client.fastapi import FastAPIAccessLogger


@pytest.fixture
def gateway():
    return mock.Mock()


@pytest.fixture
def fastapi_access_logger(gateway):
    return FastAPIAccessLogger(gateway=gateway)


def make_request(route=None):
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "server": ("127.0.0.1", 8000),
        "path": "/v2/projects",
        "query_string": b"page=2&count=10",
        "headers": [(b"user-agent", b"fossa-client")],
    }
    if route is not None:
        scope["route"] = route
    return Request(scope)


@pytest.fixture
def call_next():
    async def func(request):
        return JSONResponse({"foo": "bar"})

    return func


@mock.patch("time.time", return_value=0.0)
async def test_logging(time, fastapi_access_logger, gateway, call_next):
    route = APIRoute(
        endpoint=lambda: None, path="/projects", name="v2/list_projects", methods=["GET"]
    )

    await fastapi_access_logger(make_request(route), call_next)

    gateway.add.assert_called_once_with(
        {
            "method": "GET",
            "path": "/v2/projects",
            "query_params": "page=2&count=10",
            "view_name": "v2/list_projects",
            "status": 200,
            "user_agent": "fossa-client",
            "time": 0.0,
            "request_time": 0.0,
        }
    )


async def test_logging_no_route(fastapi_access_logger, gateway, call_next):
    await fastapi_access_logger(make_request(), call_next)

    (item,) = gateway.add.call_args.args
    assert item["view_name"] is None


async def test_no_logging_health_check(fastapi_access_logger, gateway, call_next):
    route = APIRoute(
        endpoint=lambda: None, path="/health", name="health_check", methods=["GET"]
    )

    await fastapi_access_logger(make_request(route), call_next)

    assert not gateway.add.called
