# app/core/exceptions.py
"""
Application error kinds and the kind -> handler mapping.

Every error first gets FastAPI's default response. Kinds listed in
EXCEPTION_HANDLERS are then rewritten by their handler; anything else is
returned exactly as FastAPI would have produced it.
"""
import json
import logging
from typing import Any, Callable

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.renderers import render

logger = logging.getLogger("uvicorn.error")


class AppError(HTTPException):
    """
    Base class for errors raised by the service layer.

    Subclasses set `status_code` and `default_detail`; both can be overridden
    where the error is raised.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: Any = "A server error occurred."

    def __init__(self, detail: Any = None, status_code: int | None = None):
        super().__init__(
            status_code=status_code or type(self).status_code,
            detail=detail if detail is not None else self.default_detail,
        )


class ValidationError(AppError):
    """Malformed or invalid input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."


class ProfileDoesNotExist(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The requested profile does not exist."


Handler = Callable[[Exception, Response], Response]


def _handle_generic_error(exc: Exception, response: Response) -> Response:
    """Nest the default error body under "errors", keeping the status code."""
    body = json.loads(response.body)
    logger.info("[errors] %s -> %s", exc.__class__.__name__, response.status_code)
    headers = {k: v for k, v in response.headers.items() if k.lower() not in ("content-length", "content-type")}
    return render({"errors": body}, status_code=response.status_code, headers=headers or None)


# Exception class name -> handler
EXCEPTION_HANDLERS: dict[str, Handler] = {
    "ValidationError": _handle_generic_error,
    "RequestValidationError": _handle_generic_error,
    "ProfileDoesNotExist": _handle_generic_error,
}


def register_handler(kind: str, handler: Handler) -> None:
    """Route errors whose class name is `kind` to `handler`."""
    EXCEPTION_HANDLERS[kind] = handler


async def _default_response(request: Request, exc: Exception) -> Response:
    if isinstance(exc, RequestValidationError):
        return await request_validation_exception_handler(request, exc)
    return await http_exception_handler(request, exc)


async def core_exception_handler(request: Request, exc: Exception) -> Response:
    response = await _default_response(request, exc)
    handler = EXCEPTION_HANDLERS.get(exc.__class__.__name__)
    if handler is not None:
        return handler(exc, response)
    return response


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, core_exception_handler)
    app.add_exception_handler(RequestValidationError, core_exception_handler)
