"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import activities, me, records, statistics
from config import settings
from logging_config import setup_logging
from schemas.error import ErrorResponse
from services.exceptions import MomentumError

setup_logging()
logger = logging.getLogger(__name__)

# Status codes raised as HTTPException by framework code (auth, routing)
HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
}

app = FastAPI(
    title="MyMomentum",
    description="Activity time tracking with weekly targets",
    version="0.1.0",
)

# CORS configuration for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, code: str, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.of(code, message).model_dump(),
        headers=headers,
    )


@app.exception_handler(MomentumError)
async def momentum_error_handler(request: Request, exc: MomentumError):
    logger.warning(
        "%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code
    )
    return _error_response(exc.status_code, exc.code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    message = "; ".join(details) or "Invalid request"
    logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
    return _error_response(422, "VALIDATION_ERROR", message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        code = "INTERNAL_ERROR"
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    else:
        code = HTTP_ERROR_CODES.get(exc.status_code, "BAD_REQUEST")
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return _error_response(
        exc.status_code, code, str(exc.detail), headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


# Include API routers
app.include_router(me.router)
app.include_router(activities.router)
app.include_router(records.router)
app.include_router(statistics.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
