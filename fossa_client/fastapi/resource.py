# (c) Nelen & Schuurmans

from functools import partial
from typing import Any
from typing import Callable
from typing import Dict
from typing import Optional
from typing import Type

from fastapi.routing import APIRouter

from fossa_client import ValueObject

__all__ = [
    "Resource",
    "get",
    "put",
    "APIVersion",
    "v",
]


class APIVersion(ValueObject):
    version: int

    @property
    def prefix(self) -> str:
        # version 1 is served without a prefix
        if self.version == 1:
            return ""
        return f"/v{self.version}"


def http_method(path: str, **route_options):
    def wrapper(unbound_method: Callable[..., Any]):
        setattr(
            unbound_method,
            "http_method",
            (path, route_options),
        )
        return unbound_method

    return wrapper


def v(version: int) -> APIVersion:
    return APIVersion(version=version)


get = partial(http_method, methods=["GET"])
put = partial(http_method, methods=["PUT"])


class Resource:
    """A group of routes under one API version.

    Routes are added in the order in which they are defined, which matters
    for paths containing a '{...:path}' parameter: define the longest path
    first.
    """

    version: APIVersion
    name: str

    def __init_subclass__(cls, version: APIVersion, name: str = ""):
        cls.version = version
        cls.name = name
        super().__init_subclass__()

    @classmethod
    def with_version(cls, version: APIVersion) -> Type["Resource"]:
        """The same resource, served under another version"""

        class DynamicResource(cls, version=version, name=cls.name):  # type: ignore
            pass

        DynamicResource.__name__ = cls.__name__
        DynamicResource.__doc__ = cls.__doc__

        return DynamicResource

    def _endpoints(self):
        seen = set()
        for klass in reversed(type(self).__mro__):
            for attr_name in vars(klass):
                if attr_name.startswith("_") or attr_name in seen:
                    continue
                endpoint = getattr(self, attr_name)
                if not hasattr(endpoint, "http_method"):
                    continue
                seen.add(attr_name)
                yield endpoint

    def get_router(
        self,
        responses: Optional[Dict[str, Dict[str, Any]]] = None,
        dependencies: Optional[list[Any]] = None,
    ) -> APIRouter:
        router = APIRouter()
        operation_ids = set()
        for endpoint in self._endpoints():
            path, route_options = endpoint.http_method
            route_options = dict(route_options)
            operation_id = endpoint.__name__
            if operation_id in operation_ids:
                raise RuntimeError(
                    f"Multiple operations {operation_id} configured in {self}"
                )
            operation_ids.add(operation_id)
            # The 'name' is used for reverse lookups (request.path_for): include the
            # version so that we can uniquely refer to an operation.
            name = f"v{self.version.version}/{endpoint.__name__}"
            if dependencies:
                route_options["dependencies"] = [
                    *route_options.get("dependencies", []),
                    *dependencies,
                ]

            # Update responses with route_options responses or use latter if not set
            route_responses = responses
            if "responses" in route_options:
                route_responses = {
                    **(responses or {}),
                    **route_options.pop("responses"),
                }

            router.add_api_route(
                path,
                endpoint,
                tags=[self.name],
                operation_id=name.replace("/", "_"),
                name=name,
                responses=route_responses,
                **route_options,
            )
        return router
