# (c) Nelen & Schuurmans

import logging

from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from starlette import status

from fossa_client import BadRequest
from fossa_client import DoesNotExist
from fossa_client import Unauthorized
from fossa_client import ValueObject

logger = logging.getLogger(__name__)

__all__ = [
    "ValidationErrorResponse",
    "DefaultErrorResponse",
    "not_found_handler",
    "validation_error_handler",
    "unauthorized_handler",
]


class ValidationErrorEntry(ValueObject):
    loc: list[str | int]
    msg: str
    type: str


class ValidationErrorResponse(ValueObject):
    message: str
    detail: list[ValidationErrorEntry]


class DefaultErrorResponse(ValueObject):
    message: str
    detail: str | None


async def not_found_handler(request: Request, exc: DoesNotExist) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "message": f"Could not find {exc.name}{'' if exc.id is None else ' with id=' + str(exc.id)}",
            "detail": None,
        },
    )


async def validation_error_handler(
    request: Request, exc: BadRequest | RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationErrorResponse(
            message="Validation error", detail=exc.errors()  # type: ignore
        ).model_dump(mode="json"),
    )


async def unauthorized_handler(request: Request, exc: Unauthorized) -> JSONResponse:
    if exc.args:
        logger.info(f"unauthorized: {exc}")
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"message": "Unauthorized", "detail": None},
        headers={"WWW-Authenticate": "Bearer"},
    )
