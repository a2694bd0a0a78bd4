from http import HTTPStatus

import inject

from fossa_client import DoesNotExist
from fossa_client import encode_locator
from fossa_client import Id
from fossa_client import Json

from .api_provider import ApiProvider
from .exceptions import ApiException

__all__ = ["ApiGateway"]


class ApiGateway:
    """Access to one resource at a path like 'projects/{id}'.

    The id is percent-encoded into a single path segment, so locators with
    slashes can be used as id.
    """

    path: str
    name: str = "resource"

    def __init__(self, provider_override: ApiProvider | None = None):
        self.provider_override = provider_override

    def __init_subclass__(cls, path: str, name: str = "resource") -> None:
        assert not path.startswith("/")
        assert "{id}" in path
        cls.path = path
        cls.name = name
        super().__init_subclass__()

    def url_path(self, id: Id) -> str:
        return self.path.format(id=encode_locator(str(id)))

    @property
    def provider(self) -> ApiProvider:
        return self.provider_override or inject.instance(ApiProvider)

    async def get(self, id: Id, params: Json | None = None) -> Json | None:
        try:
            result = await self.provider.request(
                "GET", self.url_path(id), params=params
            )
            assert result is not None
            return result
        except ApiException as e:
            if e.status is HTTPStatus.NOT_FOUND:
                return None
            raise e

    async def update(self, id: Id, values: Json) -> Json:
        try:
            result = await self.provider.request(
                "PUT", self.url_path(id), json=values
            )
            assert result is not None
            return result
        except ApiException as e:
            if e.status is HTTPStatus.NOT_FOUND:
                raise DoesNotExist(self.name, id)
            raise e
