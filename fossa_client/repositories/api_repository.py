from typing import Any
from typing import Generic
from typing import Type
from typing import TypeVar

import inject
from pydantic import ValidationError

from fossa_client import DoesNotExist
from fossa_client import Id
from fossa_client import Json
from fossa_client import ValueObject
from fossa_client.api_client import ApiGateway
from fossa_client.api_client import ApiProvider
from fossa_client.api_client import MalformedResponse
from fossa_client.base.domain import pagination

__all__ = ["ApiListRepository", "ApiRepository"]

T = TypeVar("T", bound=ValueObject)
Q = TypeVar("Q")


class ApiListRepository(Generic[T, Q]):
    """Lists one kind of entity from the API.

    Subclasses bind the entity type through the generic parameters and
    implement 'list_page'.
    """

    entity: Type[T]

    def __init__(self, provider_override: ApiProvider | None = None):
        self.provider_override = provider_override

    def __init_subclass__(cls) -> None:
        (base,) = cls.__orig_bases__  # type: ignore
        (entity, _) = base.__args__
        super().__init_subclass__()
        cls.entity = entity

    @property
    def provider(self) -> ApiProvider:
        return self.provider_override or inject.instance(ApiProvider)

    def _parse(self, path: str, obj: Any) -> T:
        try:
            return self.entity.model_validate(obj)
        except ValidationError as e:
            raise MalformedResponse(path, e)

    def _parse_list(self, path: str, body: Json, key: str) -> list[T]:
        items = body.get(key)
        if not isinstance(items, list):
            raise MalformedResponse(path, f"expected a list at '{key}'")
        return [self._parse(path, x) for x in items]

    def _parse_total(self, path: str, body: Json, key: str) -> int | None:
        total = body.get(key)
        if total is None:
            return None
        if isinstance(total, bool) or not isinstance(total, int):
            raise MalformedResponse(path, f"expected an integer at '{key}'")
        return total

    async def _request_body(self, path: str, params: Json | None = None) -> Json:
        body = await self.provider.request("GET", path, params=params)
        if not isinstance(body, dict):
            raise MalformedResponse(path, "expected a JSON object")
        return body

    async def list_page(self, query: Q, page: int, count: int) -> pagination.Page[T]:
        raise NotImplementedError()

    async def list_all(self, query: Q) -> list[T]:
        return await pagination.list_all(self, query)


class ApiRepository(ApiListRepository[T, Q]):
    """Lists and gets one kind of entity.

    Subclasses pass the gateway of a single entity as class keyword.
    """

    gateway_class: Type[ApiGateway]

    def __init__(self, provider_override: ApiProvider | None = None):
        super().__init__(provider_override)
        self.gateway = self.gateway_class(provider_override)

    def __init_subclass__(cls, gateway: Type[ApiGateway]) -> None:
        super().__init_subclass__()
        cls.gateway_class = gateway

    async def get(self, id: Id, params: Json | None = None) -> T:
        res = await self.gateway.get(id, params=params)
        if res is None:
            raise DoesNotExist(self.gateway.name, id)
        return self._parse(self.gateway.url_path(id), res)
