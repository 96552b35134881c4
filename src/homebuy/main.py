# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .core.config import settings
from .routes import health, public
from .schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    logging.getLogger().setLevel(settings.LOG_LEVEL.upper())
    logger.info(
        "Calculator ready: gst=%s rate=%s default_amortization=%s resale_principal=%s",
        settings.GST_RATE,
        settings.ANNUAL_INTEREST_RATE,
        settings.DEFAULT_AMORTIZATION,
        settings.PRINCIPAL_INCLUDE_RESALE_PRICE,
    )
    yield


app = FastAPI(
    title="Home Purchase Affordability API",
    description="Amortization limits, principal and upfront closing costs for a home purchase",
    version=__version__,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)

REQUEST_ID_HEADER = "x-request-id"


def _title(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _problem(request: Request, status_code: int, detail: str) -> JSONResponse:
    """Problem Details response for ``request``, echoing its correlation ID."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    body = ErrorResponse(
        title=_title(status_code),
        status=status_code,
        detail=detail,
        instance=request.url.path,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers={REQUEST_ID_HEADER: request_id},
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """One ``field.path: message`` entry per error, body prefix dropped."""
    parts = []
    for error in exc.errors():
        loc = [str(p) for p in error.get("loc", ()) if p != "body"]
        parts.append(f"{'.'.join(loc) or 'body'}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _problem(request, exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON bodies. Text that is not a number is not an error here."""
    return _problem(request, 422, _describe_validation_errors(exc))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Internal failures, such as an ungated ``assert_number``."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _problem(request, 500, "An unexpected error occurred.")


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(public.router, prefix="/api/public", tags=["public"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the Home Purchase Affordability API"}
