"""FastAPI application factory for the Shopper API."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopper_api import __version__
from shopper_api.core.logging_config import RequestLoggingMiddleware
from shopper_api.routers import shoppers as shoppers_router
from shopper_api.services.shopper_service import ShopperService

logger = logging.getLogger(__name__)

SWAGGER_UI_URL = "/swagger/index.html"
OPENAPI_URL = "/swagger/doc.json"


@asynccontextmanager
async def lifespan(app: FastAPI):
    repository = app.state.shopper_service.repository
    # A failure here aborts startup: no serving without a schema
    repository.ensure_schema()
    logger.info("Shopper API started")
    yield
    repository.close()
    logger.info("Shopper API stopped")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        {"error": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(
        "Rejected request payload",
        extra={"path": request.url.path, "errors": exc.errors()},
    )
    return JSONResponse({"error": "invalid request payload"}, status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse({"error": "internal server error"}, status_code=500)


def create_app(service: ShopperService | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn."""
    app = FastAPI(
        title="Shopper API",
        description="CRUD service for shopper profiles.",
        version=__version__,
        docs_url=SWAGGER_UI_URL,
        openapi_url=OPENAPI_URL,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.shopper_service = service or ShopperService()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/swagger", include_in_schema=False)
    def swagger_root():
        return RedirectResponse(SWAGGER_UI_URL)

    app.include_router(shoppers_router.router)
    return app


app = create_app()
