import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import ALLOWED_ORIGINS
from .database import Database
from .domain.auth.router import router as auth_router
from .domain.master_data.router import router as master_data_router
from .domain.notifications.router import router as notifications_router
from .domain.schedules.admin_router import router as admin_schedules_router
from .domain.schedules.router import router as schedules_router
from .shared.errors import ApiError
from .shared.responses import error_response, success_response

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    database: Database = app.state.database
    # Whoever opens the handle closes it
    owns_database = not database.is_open
    database.open()
    try:
        database.create_all()
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            if owns_database:
                database.close()
            raise

    yield
    logger.info("Application shutting down...")
    if owns_database:
        database.close()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error, domain or framework, into the standard envelope"""
    if isinstance(exc, ApiError):
        message = exc.detail
    elif exc.status_code == 404:
        message = "Endpoint not found"
    else:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"

    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_response(message, data=getattr(exc, "data", None))),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query params are client errors: 400, not 422"""
    errors = [
        {"field": ".".join(str(part) for part in error.get("loc", ())), "message": error.get("msg")}
        for error in exc.errors()
    ]
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content=error_response("Incomplete or invalid data", data={"errors": errors}),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log the failure and answer with a generic message; internals never reach the client"""
    logger.error(f"❌ {request.method} {request.url.path} - Unhandled error: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content=error_response("Internal server error"))


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(title="Streamline API", version=API_VERSION, lifespan=lifespan)
    app.state.database = database or Database()

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000
        logger.info(f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.1f}ms)")
        return response

    # Log CORS configuration for debugging
    logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Routes
    app.include_router(auth_router)
    app.include_router(schedules_router)
    app.include_router(notifications_router)
    app.include_router(admin_schedules_router)
    app.include_router(master_data_router)

    @app.get("/")
    def root():
        return success_response(message="Streamline API is running", data={"version": API_VERSION})

    @app.get("/health")
    def health():
        return success_response(data={"status": "healthy"})

    return app


app = create_app()
