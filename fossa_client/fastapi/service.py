# (c) Nelen & Schuurmans

from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from fossa_client import BadRequest
from fossa_client import DoesNotExist
from fossa_client import Unauthorized

from .asgi import EncodedSlashMiddleware
from .error_responses import DefaultErrorResponse
from .error_responses import not_found_handler
from .error_responses import unauthorized_handler
from .error_responses import validation_error_handler
from .error_responses import ValidationErrorResponse
from .fastapi_access_logger import AccessLogGateway
from .fastapi_access_logger import FastAPIAccessLogger
from .resource import APIVersion
from .resource import Resource

__all__ = ["Service"]


async def health_check():
    """Simple health check route"""
    return {"health": "OK"}


class Service:
    """Combines resources into one app.

    Routers are included in the order of the resources, each under the
    prefix of its version. Routing keeps '%2F' encoded, so a path parameter
    may contain an encoded slash.
    """

    resources: list[Resource]

    def __init__(self, *args: Resource):
        self.resources = list(args)

    @property
    def versions(self) -> set[APIVersion]:
        return {x.version for x in self.resources}

    def create_app(
        self,
        title: str,
        description: str = "",
        access_logger_gateway: AccessLogGateway | None = None,
        dependencies: list[Any] | None = None,
    ) -> FastAPI:
        app = FastAPI(title=title, description=description)
        if access_logger_gateway is not None:
            app.middleware("http")(FastAPIAccessLogger(gateway=access_logger_gateway))
        # added last, so it runs first
        app.add_middleware(EncodedSlashMiddleware)
        app.get("/health", include_in_schema=False)(health_check)
        for resource in self.resources:
            app.include_router(
                resource.get_router(
                    responses={
                        "400": {"model": ValidationErrorResponse},
                        "default": {"model": DefaultErrorResponse},
                    },
                    dependencies=dependencies,
                ),
                prefix=resource.version.prefix,
            )
        app.add_exception_handler(DoesNotExist, not_found_handler)  # type: ignore
        app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore
        app.add_exception_handler(BadRequest, validation_error_handler)  # type: ignore
        app.add_exception_handler(Unauthorized, unauthorized_handler)  # type: ignore
        return app
