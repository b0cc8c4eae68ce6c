"""
Research Portal

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from research_portal.config import get_settings
from research_portal.database import init_db, close_db
from research_portal.api.v1 import router as api_v1_router
from research_portal.api.middleware.request_id import RequestIdMiddleware
from research_portal.kernel.access import AccessError
from research_portal.schemas.common import ErrorResponse, HealthResponse
from research_portal.logging_config import configure_logging, get_logger

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown tasks.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.project_name,
    description="""
    Research Portal API

    Role-scoped listings for the research portal dashboards.

    ## Visibility

    - **Students** see the projects they are members of and the papers they authored
    - **Faculty** see the projects and papers they advise, plus all achievements and users
    - **Admins** see everything

    Every list endpoint returns `{data, pagination}`; errors return `{error}`.
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# add_middleware stacks innermost-first: CORS is added last so it wraps everything
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


def _error_response(request: Request, status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    """Build the {error} envelope, carrying the request id when known."""
    headers = dict(headers or {})
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
    content = ErrorResponse(error=message, request_id=req_id).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(AccessError)
async def access_error_handler(request: Request, exc: AccessError):
    """Map the access layer's error taxonomy onto HTTP statuses."""
    if exc.status_code >= 500:
        logger.error("Access layer failure: %s", type(exc).__name__, exc_info=exc.__cause__)
    else:
        logger.info(
            "Request rejected",
            extra={"error_type": type(exc).__name__, "status_code": exc.status_code},
        )
    return _error_response(request, exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """401 from the bearer dependency, 404 for unknown routes, etc."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error_response(request, exc.status_code, message, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request parameters are client errors."""
    fields = [".".join(str(loc) for loc in error["loc"]) for error in exc.errors()]
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        f"Invalid request parameters: {', '.join(fields)}",
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Unexpected failures: log the trace, return a generic message."""
    logger.exception("Unhandled exception: %s", exc)
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    return HealthResponse(
        status="ok",
        version=settings.version,
        database="connected",
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": {
            "v1": settings.api_v1_prefix,
        },
    }


app.include_router(
    api_v1_router,
    prefix=settings.api_v1_prefix,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "research_portal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
