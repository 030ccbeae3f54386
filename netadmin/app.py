"""FastAPI application for the network admin governance API.

``create_app`` wires middleware, the versioned router and the handlers that
render every failure as ``{"error": {code, message, details, requestId}}``.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from netadmin.api.v1 import v1_router
from netadmin.config import settings
from netadmin.database.engine import engine
from netadmin.exceptions import AppException, ForbiddenException
from netadmin.log_config import configure_logging
from netadmin.middleware.request_id import RequestIdMiddleware

logger = logging.getLogger(__name__)

# Per client IP, applied to every route through SlowAPIMiddleware
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Governance API starting (environment=%s)", settings.environment)
    yield
    await engine.dispose()


def error_envelope(
    request: Request, status_code: int, code: str, message: str, details: list | None = None
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    body = {"code": code, "message": message, "details": details or [], "requestId": request_id}
    return JSONResponse(status_code=status_code, content={"error": body})


async def handle_app_exception(request: Request, exc: AppException) -> JSONResponse:
    if isinstance(exc, ForbiddenException):
        logger.warning("%s %s denied: %s", request.method, request.url.path, exc.message)
    elif exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message)
    return error_envelope(request, exc.status_code, exc.code, exc.message, exc.details)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()))
        details.append({"field": field, "message": err.get("msg", "")})
    return error_envelope(request, 422, "VALIDATION_ERROR", "Validation failed", details)


async def handle_rate_limit(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return error_envelope(request, 429, "RATE_LIMITED", str(exc.detail))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_envelope(request, 500, "INTERNAL_ERROR", "An unexpected error occurred.")


def create_app() -> FastAPI:
    configure_logging()

    application = FastAPI(
        title="Network Admin Governance API",
        description="Scoped administration, broadcast targeting and audit trail for a nonprofit network.",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    application.state.limiter = limiter

    # Starlette runs the last-added middleware first: request IDs wrap CORS,
    # which wraps rate limiting.
    application.add_middleware(SlowAPIMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestIdMiddleware)

    application.include_router(v1_router)

    application.add_exception_handler(AppException, handle_app_exception)
    application.add_exception_handler(RequestValidationError, handle_request_validation)
    application.add_exception_handler(RateLimitExceeded, handle_rate_limit)
    application.add_exception_handler(Exception, handle_unexpected)

    @application.get("/health")
    async def health_check() -> dict:
        return {"status": "ok"}

    return application


app = create_app()
