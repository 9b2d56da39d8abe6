"""Storefront FastAPI application.

Usage:
    uvicorn storefront.infrastructure.api.app:app --port 8000
or
    storefront serve
"""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.domain.exceptions import (
    ConcurrencyConflictError,
    DomainException,
    EntityNotFoundError,
    ForbiddenError,
    InsufficientStockError,
    ValidationError,
)
from storefront.infrastructure.api.routes import (
    cart_router,
    category_router,
    order_router,
    product_router,
)
from storefront.utils.logging import add_context, clear_context, configure_logging

API_PREFIX = "/api/v1"

# First match wins; subclasses come before their parents.
_STATUS_BY_ERROR: list[tuple[type[DomainException], int]] = [
    (EntityNotFoundError, 404),
    (ForbiddenError, 403),
    (ConcurrencyConflictError, 409),
    (InsufficientStockError, 400),
    (ValidationError, 400),
]

logger = structlog.get_logger(__name__)


def status_for(exc: DomainException) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def _fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"status": "fail", "message": message}
    )


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Storefront API",
        description="Catalog, cart and order management",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind per-request fields to every log line emitted while handling it."""
        clear_context()
        add_context(
            request_id=uuid.uuid4().hex[:12],
            method=request.method,
            path=request.url.path,
            user_id=request.headers.get("x-user-id"),
        )
        try:
            return await call_next(request)
        finally:
            clear_context()

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        status_code = status_for(exc)
        if status_code == 500:
            logger.error("Unmapped domain error", error=str(exc))
            return _server_error()
        logger.info(
            "Request rejected",
            status_code=status_code,
            error=str(exc),
        )
        return _fail(status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        return _fail(400, f"{field}: {message}" if field else message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _fail(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error")
        return _server_error()

    for router in (product_router, category_router, cart_router, order_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def _server_error() -> JSONResponse:
    return JSONResponse(
        status_code=500, content={"status": "error", "message": "Something went wrong"}
    )


app = create_app()
