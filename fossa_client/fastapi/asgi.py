import re
from urllib.parse import unquote

from starlette.requests import Request
from starlette.types import ASGIApp
from starlette.types import Receive
from starlette.types import Scope
from starlette.types import Send

__all__ = ["EncodedSlashMiddleware"]

# escapes that stay encoded in the routing path: '/' and '%' itself
KEPT_ESCAPES = re.compile(r"(%2[fF]|%25)")


def get_view_name(request: Request) -> str | None:
    try:
        view_name = request.scope["route"].name
    except KeyError:
        return None

    return view_name


def is_health_check(request: Request) -> bool:
    return get_view_name(request) == "health_check"


def decode_path(raw_path: bytes) -> str:
    """Percent-decode a raw request path, except for '%2F' and '%25'.

    An encoded slash therefore stays inside its path segment, and the segment
    can be decoded exactly once by the endpoint.
    """
    parts = KEPT_ESCAPES.split(raw_path.decode("latin-1"))
    return "".join(
        part.upper() if i % 2 else unquote(part) for (i, part) in enumerate(parts)
    )


class EncodedSlashMiddleware:
    """Route on the raw path so that '%2F' does not act as a separator.

    Servers put the fully decoded path in scope["path"]. This middleware
    rebuilds it from scope["raw_path"] with decode_path. Written as generic
    ASGI middleware because it has to change the scope before routing.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        raw_path = scope.get("raw_path")
        if scope["type"] == "http" and raw_path:
            scope["path"] = decode_path(raw_path.split(b"?", 1)[0])
        await self.app(scope, receive, send)
