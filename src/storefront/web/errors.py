"""Map storefront, Protean and request errors onto the JSON envelope."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from storefront import config
from storefront.errors import StorefrontError

logger = structlog.get_logger(__name__)


def _first_message(messages) -> str:
    """Readable summary of the first problem in a Protean error dict."""
    if isinstance(messages, dict) and messages:
        field, problems = next(iter(messages.items()))
        problem = str(problems[0] if isinstance(problems, (list, tuple)) and problems else problems)
        # Domain messages are full sentences, Protean's field messages are fragments
        if field == "_entity" or problem[:1].isupper():
            return problem
        return f"{field}: {problem}"
    return "Invalid request"


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": _first_message(exc.messages), "errors": exc.messages},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in error["loc"] if part != "body"), "message": error["msg"]}
        for error in exc.errors()
    ]
    message = f"{errors[0]['field']}: {errors[0]['message']}" if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "message": message, "errors": errors})


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"success": False, "message": "Not found"})


async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "message": str(exc)})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    content = {"success": False, "message": "Something went wrong"}
    if not config.is_production():
        content["error"] = f"{type(exc).__name__}: {exc}"
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(InvalidOperationError, invalid_operation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
