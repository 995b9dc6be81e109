from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortener_app.config import settings
from shortener_app.database.connection import init_db
from shortener_app.exceptions import ShortenerError, StoreNotConfigured
from shortener_app.logging_config import initialize_logging
from shortener_app.schemas.url import HealthResponse
from shortener_app.api.v1 import urls, stats, redirect

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    initialize_logging()
    try:
        init_db()
    except StoreNotConfigured:
        # Handlers answer 500 "Database not configured" until it is set
        logger.warning("Database not configured, skipping table creation")
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener service built with FastAPI",
    debug=settings.debug,
    lifespan=lifespan,
)


######## Error handlers

@app.exception_handler(ShortenerError)
async def shortener_error_handler(request: Request, exc: ShortenerError):
    """Every application error becomes {"error": message} with its status"""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Routing errors (unknown path, wrong method) use the same {"error": ...} shape"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def _validation_message(exc: RequestValidationError) -> str:
    for error in exc.errors():
        loc = error.get("loc", ())
        if error["type"] == "json_invalid" or tuple(loc) == ("body",):
            return "Invalid JSON body"
        if error["type"] == "missing" and loc[0] == "body":
            return f"Missing required field: {loc[-1]}"
        return f"Invalid value for field: {loc[-1]}"
    return "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a 400, not FastAPI's default 422"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": _validation_message(exc)},
    )


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/api/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.app_version,
    )


######## Include routers
app.include_router(urls.router, prefix="/api")
app.include_router(stats.router, prefix="/api")
# Must be last: /{code} would otherwise catch /api/* paths
app.include_router(redirect.router)
