"""
Translation of raised errors into '{error, details}' JSON responses.

'SocialError' subclasses map to their own status code, request validation
failures to 400 and anything unexpected to a logged 500.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from social_toolkit.errors import SocialError


async def social_error_handler(request: Request, exc: SocialError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_payload()))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [{"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]} for error in exc.errors()]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error", "details": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SocialError, social_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
