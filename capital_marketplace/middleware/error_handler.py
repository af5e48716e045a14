# capital_marketplace/middleware/error_handler.py
"""Global error handling middleware"""
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from capital_marketplace.core.logger import get_logger
from capital_marketplace.schemas.common import ErrorDetail, ErrorResponse
from capital_marketplace.utils.exceptions import MarketplaceException, TransientStoreError

logger = get_logger(__name__)

_HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
    429: "RATE_LIMIT_EXCEEDED",
}


def error_content(
    request: Request,
    message: str,
    code: str,
    details: Optional[List[ErrorDetail]] = None,
) -> dict:
    return ErrorResponse(
        error=message,
        code=code,
        path=str(request.url.path),
        details=details,
    ).to_content()


def register_error_handlers(app: FastAPI):
    """Register error handlers with FastAPI app"""

    @app.exception_handler(MarketplaceException)
    async def marketplace_exception_handler(request: Request, exc: MarketplaceException):
        """Handle domain exceptions raised by services"""
        if exc.status_code >= 500:
            logger.error(f"{exc.code}: {exc.message}")
        else:
            logger.warning(f"{exc.code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_content(request, exc.message, exc.code),
        )

    @app.exception_handler(OperationalError)
    @app.exception_handler(InterfaceError)
    async def store_exception_handler(request: Request, exc: Exception):
        """Database connection failures that escaped the services"""
        logger.error(f"Data store unavailable: {exc}")
        unavailable = TransientStoreError()
        return JSONResponse(
            status_code=unavailable.status_code,
            content=error_content(request, unavailable.message, unavailable.code),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed body, path or query parameters"""
        details = [
            ErrorDetail(
                field=".".join(str(part) for part in error["loc"] if part != "body"),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=error_content(request, "Validation failed", "VALIDATION_ERROR", details=details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_content(request, message, _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions"""
        logger.error(f"Unexpected error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_content(request, "An unexpected error occurred", "INTERNAL_SERVER_ERROR"),
        )
