"""Global exception handlers turning API errors into JSON bodies."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import (
    OriginNotAllowedError,
    ProductNotFoundError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": exc.errors},
        )

    @app.exception_handler(ProductNotFoundError)
    async def product_not_found_handler(request: Request, exc: ProductNotFoundError):
        logger.info(f"Product {exc.product_id} not found ({request.method})")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=exc.to_response(),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Database error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Error interno del servidor"},
        )


def origin_rejected_response(exc: OriginNotAllowedError) -> JSONResponse:
    """Generic failure returned when the cross-origin gate rejects a request."""
    logger.warning(f"[CORS] Rejected request from origin {exc.origin}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "CORS Error"},
    )
