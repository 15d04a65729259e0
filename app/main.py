# Main application file

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from app.core import response
from app.core.config import settings
from app.core.errors import AppError, ErrorKind
from app.core.rate_limiter import limiter
from app.routers import auth, products, shops


# LOGGING CONFIGURATION

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


# APP INIT

app = FastAPI(
    title=settings.APP_NAME,
    description="Multi-tenant shops and products backend with Google sign-in",
    version="1.0.0",
)


# CORS

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=["Authorization", "Content-Type", "X-USER-ID"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)
app.add_middleware(SlowAPIMiddleware)


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response_ = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response_.status_code} "
        f"Time: {duration}ms"
    )

    return response_


# ERROR HANDLERS
# Every failure leaves as {success: false, message, errors}

def _field_errors(errors) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}

    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "header")]
        field = ".".join(loc) or "request"
        fields.setdefault(field, []).append(err.get("msg", "Invalid value"))

    return fields


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.kind == ErrorKind.INTERNAL:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=response.error(exc.message, exc.errors),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.method} {request.url.path} - Invalid request")

    return JSONResponse(
        status_code=400,
        content=response.error("", _field_errors(exc.errors())),
    )


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content=response.error("", _field_errors(exc.errors())),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=response.error(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    # Driver messages never reach the client
    logger.error(f"{request.method} {request.url.path} database error: {exc.__class__.__name__}")

    return JSONResponse(
        status_code=500,
        content=response.error("Unable to process request"),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} unexpected error")

    return JSONResponse(
        status_code=500,
        content=response.error("Internal server error"),
    )


# ROUTERS

app.include_router(auth.router)
app.include_router(products.router)
app.include_router(shops.router)


# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return response.success(None, f"{settings.APP_NAME} is running")
