"""Render domain errors as ``{"kind", "message"}`` JSON bodies."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from ratings.errors import RatingsError

logger = structlog.get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register after Protean's own handlers so these take precedence."""

    @app.exception_handler(RatingsError)
    async def ratings_error_handler(request: Request, exc: RatingsError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, kind=exc.kind, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "kind": "validation_error",
                "message": "Invalid review data",
                "details": jsonable_encoder(exc.messages),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "kind": "validation_error",
                "message": "Malformed request",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"kind": "not_found", "message": "Resource not found"})
