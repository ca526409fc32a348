from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.core import get_logger
from storefront.core_settings import get_settings
from storefront.domain.errors import StorefrontError

logger = get_logger(__name__)

# Pydantic location prefixes that mean nothing to API clients
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}

def envelope(success: bool, message=None, data=None, errors=None) -> dict:
    body = {"success": success}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = errors
    return body

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
                         exc_info=exc.__cause__ is not None)
        return JSONResponse(status_code=exc.status_code,
                            content=envelope(False, exc.message, errors=exc.errors))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = []
        for error in exc.errors():
            location = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
            errors.append({"field": ".".join(location), "message": error.get("msg", "Invalid value")})
        return JSONResponse(status_code=400, content=envelope(False, "Validation failed", errors=errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=envelope(False, str(exc.detail)),
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        message = "Internal server error"
        if get_settings().EXPOSE_ERROR_DETAILS:
            message = f"{message}: {exc}"
        return JSONResponse(status_code=500, content=envelope(False, message))
