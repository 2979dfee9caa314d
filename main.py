"""
Main FastAPI application entry point.
"""
import time
import logging
import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import OperationalError

from config import settings
from Utils.request_utils import get_client_ip

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    force=True
)

logger = logging.getLogger(__name__)

from alembic_runner import run_migrations

# Import models to register with SQLAlchemy Base
from Subscriber_module.Subscriber_model import Subscriber

# Routers
from Subscriber_module.Subscriber_router import router as subscriber_router, UNEXPECTED_DETAIL
from Notification_module.Notification_router import router as notification_router


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses with status codes."""

    async def dispatch(self, request: Request, call_next):
        client_ip = get_client_ip(request)
        start_time = time.time()

        logger.info(f"-> {request.method} {request.url.path} | IP: {client_ip}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"{request.method} {request.url.path} | "
                f"Status: 500 (SERVER_ERROR) | "
                f"Error: {str(e)} | "
                f"Duration: {duration:.3f}s | "
                f"IP: {client_ip}"
            )
            raise

        duration = time.time() - start_time
        status_code = response.status_code
        if 200 <= status_code < 300:
            status_category = "SUCCESS"
        elif 300 <= status_code < 400:
            status_category = "REDIRECT"
        elif 400 <= status_code < 500:
            status_category = "CLIENT_ERROR"
        else:
            status_category = "SERVER_ERROR"

        logger.info(
            f"<- {request.method} {request.url.path} | "
            f"Status: {status_code} ({status_category}) | "
            f"Duration: {duration:.3f}s | "
            f"IP: {client_ip}"
        )
        return response


def initialize_database():
    """
    Bring the schema up to date with Alembic.
    Connection errors are logged; the app still starts and requests will fail with 500.
    """
    try:
        logger.info("Running database migrations...")
        run_migrations()
        logger.info("Database migrations completed successfully")
    except OperationalError as e:
        logger.error(f"Failed to connect to database during migrations: {e}")
        logger.warning("Migrations will be retried on next startup")
    except Exception as e:
        logger.error(f"Unexpected error during migrations: {e}", exc_info=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    logger.info("Starting application...")
    initialize_database()
    logger.info("Application started successfully")
    yield
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Lingua Landing API",
    version="1.0.0",
    lifespan=lifespan
)


# Validation error types that mean "the field was not supplied"
REQUIRED_ERROR_TYPES = {"missing", "string_too_short"}


def _format_validation_errors(exc):
    """Return consistent error structure for the `details` list."""
    detail_list = []
    errors = exc.errors() if hasattr(exc, "errors") else []

    for err in errors:
        loc = err.get("loc", [])
        source = loc[0] if loc else "body"
        field = loc[-1] if len(loc) > 1 else loc[0] if loc else None
        detail_list.append({
            "source": source,
            "field": field,
            "message": err.get("msg"),
            "type": err.get("type")
        })
    return detail_list


def _validation_error_content(exc) -> dict:
    """
    Map the first validation error to the landing page error contract:
    malformed body -> Invalid JSON, absent/empty field -> Field required,
    bad email -> Invalid email format.
    """
    errors = exc.errors() if hasattr(exc, "errors") else []
    details = _format_validation_errors(exc)

    for err in errors:
        loc = tuple(err.get("loc", ()))
        if err.get("type") == "json_invalid" or len(loc) < 2:
            return {
                "success": False,
                "message": "Invalid request format",
                "error": "Invalid JSON",
                "details": details,
            }

    err = errors[0] if errors else {}
    loc = tuple(err.get("loc", ()))
    field = str(loc[-1]) if loc else "body"
    is_required = err.get("type") in REQUIRED_ERROR_TYPES or (
        err.get("type") == "string_type" and err.get("input") is None
    )

    if is_required:
        label = "Email" if field == "email" else field
        return {
            "success": False,
            "message": f"{label} is required",
            "error": "Field required",
            "details": details,
        }

    if field == "email":
        return {
            "success": False,
            "message": "Invalid email format",
            "error": "Invalid email format",
            "details": details,
        }

    return {
        "success": False,
        "message": f"Invalid value for {field}",
        "error": "Invalid field",
        "details": details,
    }


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Every input problem is a client error (400), including malformed JSON."""
    content = _validation_error_content(exc)
    logger.info(f"Rejected {request.method} {request.url.path} | {content['error']} | {content['message']}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


# Messages for errors raised by routing itself rather than by a route
ROUTING_ERROR_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Flatten dict details into the body; wrap plain string details (404, 405)."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        message = ROUTING_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        content = {"success": False, "message": message, "error": message}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything not mapped by a route still gets the JSON error shape."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=UNEXPECTED_DETAIL)


# CORS configuration
ALLOWED_ORIGINS = [origin.strip() for origin in settings.ALLOWED_ORIGINS.split(",") if origin.strip()]
if ALLOWED_ORIGINS == ["*"]:
    warnings.warn("CORS is set to allow all origins. This is not recommended for production.")

# Middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=ALLOWED_ORIGINS != ["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With"],
)

app.include_router(subscriber_router)
app.include_router(notification_router)


@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "status": "success",
        "message": "Lingua Landing API",
        "version": "1.0.0",
        "endpoints": {
            "subscribe": "/api/subscribe",
            "early_access": "/api/early-access",
            "send_telegram": "/api/send-telegram",
        },
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "service": "Lingua Landing API"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info",
        access_log=True,
    )
