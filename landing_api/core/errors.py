# landing_api/core/errors.py
"""
Error taxonomy for the API.

Every failure leaves the service as the same envelope: ``{"ok": false,
"error": "<reason>"}``. Only storage failures are logged as errors, and
their reason never carries the underlying exception text.
"""
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class ApiError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    error: Optional[str] = None

    def __init__(self, error: Optional[str] = None, headers: Optional[dict] = None):
        if error is not None:
            self.error = error
        self.headers = headers or {}
        super().__init__(self.error or self.__class__.__name__)

    def to_response(self) -> JSONResponse:
        body = {"ok": False}
        if self.error is not None:
            body["error"] = self.error
        return JSONResponse(status_code=self.status_code, content=body, headers=self.headers)


# ---- client input ----
class MissingField(ApiError):
    error = "name and phone are required"


class InvalidPhone(ApiError):
    error = "invalid phone"


class InvalidType(ApiError):
    error = "invalid type"


class InvalidBody(ApiError):
    error = "invalid body"


class PayloadTooLarge(ApiError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    error = "payload too large"


# ---- gates ----
class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "unauthorized"


class Misconfigured(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "API_KEY not set"


class RateLimited(ApiError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    error = "too many requests"


class OriginRejected(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "origin not allowed"


# ---- storage ----
class StorageFailure(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "db_error"


class OpaqueStorageFailure(StorageFailure):
    """Storage failure answered with a bare ``{"ok": false}``."""
    error = None


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return exc.to_response()


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return InvalidBody().to_response()


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
