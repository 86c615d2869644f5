"""FastAPI application entry point for the EnerTrack Device History Service.

This service backs the history screen of the EnerTrack home energy tracker.
It identifies the caller from their session cookie and returns the device
usage entries they have recorded, each joined with its category.

Run with: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import ResponseValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.errors import EncodingFailed, HistoryError, MethodNotAllowed
from app.routers.history import router as history_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description=(
        "Returns the device usage history of the logged-in EnerTrack user, "
        "with each entry joined to its device category."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(history_router)


def _error_response(error: HistoryError, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.message},
        headers=headers,
    )


@app.exception_handler(HistoryError)
async def history_error_handler(request: Request, exc: HistoryError):
    """Translate a history failure into its status and public message."""
    return _error_response(exc)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render framework HTTP errors with the same body shape as history errors."""
    headers = getattr(exc, "headers", None)
    if exc.status_code == 405:
        return _error_response(MethodNotAllowed(), headers=headers)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=headers,
    )


@app.exception_handler(ResponseValidationError)
async def response_validation_handler(request: Request, exc: ResponseValidationError):
    """Report a response that does not match its declared model."""
    logger.error("Error encoding response for %s: %s", request.url.path, exc.errors())
    return _error_response(EncodingFailed())


@app.on_event("startup")
def on_startup():  # pragma: no cover
    """Create database tables on startup if they don't exist."""
    from app.database import Base, engine

    Base.metadata.create_all(bind=engine)


@app.get("/", tags=["Health"])
def health_check():
    """Health check endpoint to verify the service is running."""
    return {"status": "healthy", "service": settings.APP_NAME}
