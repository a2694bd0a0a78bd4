import asyncio
import logging
import re
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Mapping
from http import HTTPStatus
from urllib.parse import quote
from urllib.parse import urlencode
from urllib.parse import urljoin

import aiohttp
from aiohttp import ClientResponse
from aiohttp import ClientSession
from aiohttp import ClientTimeout
from pydantic import AnyHttpUrl

from fossa_client import Json
from fossa_client import Provider

from .exceptions import ApiException
from .exceptions import RateLimited

__all__ = ["ApiProvider"]

logger = logging.getLogger(__name__)

# Retry on 429 and all 5xx errors (because they are mostly temporary)
RETRY_STATUSES = frozenset(
    {
        HTTPStatus.TOO_MANY_REQUESTS,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        HTTPStatus.BAD_GATEWAY,
        HTTPStatus.SERVICE_UNAVAILABLE,
        HTTPStatus.GATEWAY_TIMEOUT,
    }
)
# PUT is idempotent for us: the API replaces the given fields.
RETRY_METHODS = frozenset(["HEAD", "GET", "PUT", "DELETE", "OPTIONS", "TRACE"])

USER_AGENT = "fossa-client"


def is_success(status: HTTPStatus) -> bool:
    """Returns True on 2xx status"""
    return (int(status) // 100) == 2


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in seconds. HTTP dates are ignored."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def check_exception(status: HTTPStatus, body: Json, headers: Mapping[str, str]) -> None:
    if status == HTTPStatus.TOO_MANY_REQUESTS:
        raise RateLimited(body, retry_after=parse_retry_after(headers.get("Retry-After")))
    elif not is_success(status):
        raise ApiException(body, status=status)


JSON_CONTENT_TYPE_REGEX = re.compile(r"^application\/[^+]*[+]?(json);?.*$")


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    return bool(JSON_CONTENT_TYPE_REGEX.match(content_type))


def join(url: str, path: str) -> str:
    """Results in a full url without trailing slash"""
    assert url.endswith("/")
    assert not path.startswith("/")
    result = urljoin(url, path)
    if result.endswith("/"):
        result = result[:-1]
    return result


def add_query_params(url: str, params: Json | None) -> str:
    if not params:
        return url
    # booleans as the API expects them: true / false
    params = {
        k: (str(v).lower() if isinstance(v, bool) else v) for (k, v) in params.items()
    }
    return url + "?" + urlencode(params, doseq=True)


class ApiProvider(Provider):
    """Basic JSON API provider with retry policy and bearer tokens.

    The default retry policy has 3 retries with 1, 2, 4 second intervals.

    Paths are quoted, but existing percent-escapes are kept. So a locator
    that is already encoded into a single path segment stays one segment.

    Args:
        url: The url of the API (with trailing slash)
        headers_factory: Coroutine that returns headers (for e.g. authorization)
        retries: Total number of retries per request
        backoff_factor: Multiplier for retry delay times (1, 2, 4, ...)
        user_agent: Value of the User-Agent header
        timeout: Default timeout of a request in seconds
    """

    def __init__(
        self,
        url: AnyHttpUrl | str,
        headers_factory: Callable[[], Awaitable[dict[str, str]]] | None = None,
        retries: int = 3,
        backoff_factor: float = 1.0,
        user_agent: str = USER_AGENT,
        timeout: float = 30.0,
    ):
        self._url = str(url)
        if not self._url.endswith("/"):
            self._url += "/"
        self._headers_factory = headers_factory
        assert retries >= 0
        self._retries = retries
        self._backoff_factor = backoff_factor
        self._user_agent = user_agent
        self._timeout = timeout
        self._session: ClientSession | None = None

    @property
    def url(self) -> str:
        return self._url

    async def connect(self) -> None:
        # The ClientSession must be created inside a running event loop.
        if self._session is None:
            self._session = ClientSession()

    async def disconnect(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _request_with_retry(
        self,
        method: str,
        path: str,
        params: Json | None,
        json: Json | None,
        headers: dict[str, str] | None,
        timeout: float,
    ) -> ClientResponse:
        if self._session is None:
            raise RuntimeError("ApiProvider is not connected; call connect() first")
        request_kwargs = {
            "method": method,
            "url": add_query_params(
                join(self._url, quote(path, safe="/%")), params
            ),
            "timeout": ClientTimeout(total=timeout),
            "json": json,
        }
        actual_headers = {"User-Agent": self._user_agent}
        if self._headers_factory is not None:
            actual_headers.update(await self._headers_factory())
        if headers:
            actual_headers.update(headers)
        retries = self._retries if method.upper() in RETRY_METHODS else 0
        for attempt in range(retries + 1):
            if attempt > 0:
                backoff = self._backoff_factor * 2 ** (attempt - 1)
                logger.info(
                    "retrying %s %s in %.1f s (attempt %d of %d)",
                    method,
                    path,
                    backoff,
                    attempt,
                    retries,
                )
                await asyncio.sleep(backoff)

            try:
                response = await self._session.request(
                    headers=actual_headers, **request_kwargs
                )
                await response.read()
            except (aiohttp.ClientError, asyncio.exceptions.TimeoutError):
                if attempt == retries:
                    raise  # propagate ClientError in case no retries left
                continue
            if response.status not in RETRY_STATUSES:
                return response

        return response  # retries exceeded; return the (possibly error) response

    async def request(
        self,
        method: str,
        path: str,
        params: Json | None = None,
        json: Json | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Json | None:
        response = await self._request_with_retry(
            method, path, params, json, headers, timeout or self._timeout
        )
        status = HTTPStatus(response.status)
        content_type = response.headers.get("Content-Type")
        if status is HTTPStatus.NO_CONTENT:
            return None
        if not is_json_content_type(content_type):
            if status is HTTPStatus.TOO_MANY_REQUESTS:
                raise RateLimited(
                    "rate limit exceeded",
                    retry_after=parse_retry_after(response.headers.get("Retry-After")),
                )
            raise ApiException(
                f"Unexpected content type '{content_type}'", status=status
            )
        body = await response.json()
        check_exception(status, body, response.headers)
        return body
