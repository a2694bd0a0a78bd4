from http import HTTPStatus
from typing import Any

__all__ = ["ApiException", "RateLimited", "MalformedResponse"]


class ApiException(ValueError):
    def __init__(self, obj: Any, status: HTTPStatus):
        self.status = status
        super().__init__(obj)

    def __str__(self):
        return f"{self.status}: {super().__str__()}"


class RateLimited(ApiException):
    """The API kept answering 429 Too Many Requests after all retries"""

    def __init__(self, obj: Any, retry_after: float | None = None):
        self.retry_after = retry_after
        super().__init__(obj, status=HTTPStatus.TOO_MANY_REQUESTS)


class MalformedResponse(ValueError):
    """The response body does not have the expected shape"""

    def __init__(self, path: str, reason: Any):
        self.path = path
        super().__init__(f"malformed response from '{path}': {reason}")
