# (c) Nelen & Schuurmans

import logging
import time
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Protocol

from starlette.requests import Request
from starlette.responses import Response

from fossa_client import Json

from .asgi import get_view_name
from .asgi import is_health_check

__all__ = ["FastAPIAccessLogger", "AccessLogGateway"]

logger = logging.getLogger(__name__)


class AccessLogGateway(Protocol):
    def add(self, item: Json) -> None: ...


class FastAPIAccessLogger:
    """Middleware that records every request, except the health check.

    The record is added before the response is returned, so it is available
    as soon as the client has the response.
    """

    def __init__(self, gateway: AccessLogGateway):
        self.gateway = gateway

    async def __call__(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.scope["type"] != "http":
            return await call_next(request)

        time_received = time.time()
        response = await call_next(request)
        request_time = time.time() - time_received

        # the route is only known after routing
        if not is_health_check(request):
            log_access(self.gateway, request, response, time_received, request_time)
        return response


def log_access(
    gateway: AccessLogGateway,
    request: Request,
    response: Response,
    time_received: float,
    request_time: float,
) -> None:
    item = {
        "method": request.method,
        "path": request.url.path,
        "query_params": request.url.query,
        "view_name": get_view_name(request),
        "status": response.status_code,
        "user_agent": request.headers.get("user-agent"),
        "time": time_received,
        "request_time": request_time,
    }
    logger.debug(
        "%s %s?%s -> %d", item["method"], item["path"], item["query_params"], item["status"]
    )
    gateway.add(item)
