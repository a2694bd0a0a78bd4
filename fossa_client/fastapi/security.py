# (c) Nelen & Schuurmans

import logging
from typing import Callable

from fastapi import Request
from fastapi.security import HTTPBearer
from starlette.concurrency import run_in_threadpool

from fossa_client import Unauthorized

__all__ = ["BearerTokenSchema"]

logger = logging.getLogger(__name__)


class BearerTokenSchema(HTTPBearer):
    """A fastapi 'dependable' that compares the bearer token with a required one.

    The required token is looked up on every request (in the thread pool),
    so it may change while the app is running. If there is no required
    token, every request passes.

    Because this class derives from a FastAPI built in, the openapi schema for
    bearer authentication is automatically configured.
    """

    def __init__(self, required_token: Callable[[], str | None]):
        self._required_token = required_token
        super().__init__(scheme_name="Bearer", auto_error=False)

    async def __call__(self, request: Request) -> None:  # type: ignore[override]
        # the lookup may block on a lock, so keep it off the event loop
        required = await run_in_threadpool(self._required_token)
        if required is None:
            return None
        credentials = await super().__call__(request)
        if credentials is None:
            raise Unauthorized("missing bearer token")
        if credentials.credentials != required:
            raise Unauthorized("invalid bearer token")
        return None
