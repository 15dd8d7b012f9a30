"""
Exception handlers. Every failure leaves the API as JSON ``{"error": ...}``:

- HTTPException      -> its status, ``{"error": detail}``
- validation errors  -> 400, ``{"error": {"formErrors": [...], "fieldErrors": {...}}}``
- anything else      -> 500, generic message, traceback logged server side
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cultural_spa.core.logging import get_logger

logger = get_logger(__name__)

# Location prefixes that name where a value came from rather than which field
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def flatten_validation_errors(errors) -> dict:
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        message = error.get("msg", "Invalid value")
        # A body that is not valid JSON is located by character offset, not by field
        if loc and error.get("type") != "json_invalid":
            field_errors.setdefault(".".join(loc), []).append(message)
        else:
            form_errors.append(message)
    return {"formErrors": form_errors, "fieldErrors": field_errors}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder({"error": exc.detail}),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    flattened = flatten_validation_errors(exc.errors())
    logger.info("request_validation_failed", fields=sorted(flattened["fieldErrors"]))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": flattened})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", error_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
