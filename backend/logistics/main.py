"""
FastAPI entrypoint for the Wells logistics backend.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError
from logistics.core.config import settings
from logistics.core.exceptions import LogisticsError, InvalidInputError, ServiceUnavailableError
from logistics.core.utils import format_error, utcnow
from logistics.db.session import Database
from logistics.api.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _error_response(exc: LogisticsError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error(exc.message, exc.kind, exc.details),
    )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application around a Database the app will own."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = app.state.database
        db.open()
        db.create_tables()
        yield
        db.close()

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Backend API for passenger trips and site occupancy",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database or Database.from_settings(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LogisticsError)
    async def handle_domain_error(request: Request, exc: LogisticsError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        error = InvalidInputError("Invalid request", details=jsonable_errors(exc))
        return _error_response(error)

    @app.exception_handler(OperationalError)
    @app.exception_handler(PoolTimeoutError)
    async def handle_store_outage(request: Request, exc: Exception):
        logger.error(f"Database unavailable during {request.method} {request.url.path}: {exc}")
        return _error_response(ServiceUnavailableError("Database is unavailable, try again later"))

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        """Service banner."""
        return {"message": f"{settings.APP_NAME} API is running"}

    @app.get("/api/health")
    async def health(request: Request):
        """Health check endpoint with database connectivity."""
        connected = request.app.state.database.is_healthy()
        return JSONResponse(
            status_code=status.HTTP_200_OK if connected else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "OK" if connected else "DEGRADED",
                "database": {"connected": connected},
                "timestamp": utcnow().isoformat(),
            },
        )

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the raw input, which may hold passwords."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


app = create_app()
