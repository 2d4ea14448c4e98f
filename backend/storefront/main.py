"""
Storefront Backend - FastAPI Application

E-commerce backend serving payments, orders, products and users under
/api/v1 with a uniform JSON error envelope.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging

from .config import settings
from .exceptions import StorefrontError
from .db.init_db import StoreLocks, dispose_engine, get_session_factory, init_engine, initialize_database
from .db.seed import seed_ledgers
from .api.payments import router as payments_router
from .api.orders import router as orders_router
from .api.products import router as products_router
from .api.users import router as users_router


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: Create ledger tables, open the async engine, seed demo rows,
      create per-store locks
    - Shutdown: Dispose the engine
    """
    logger.info("Starting Storefront backend server...")
    logger.info(f"Database: {settings.database_path}")

    try:
        initialize_database()
        init_engine()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    if settings.seed_demo_data:
        async with get_session_factory()() as session:
            await seed_ledgers(session)

    app.state.store_locks = StoreLocks()

    logger.info("Server startup complete")

    yield

    logger.info("Shutting down Storefront backend server...")
    await dispose_engine()


# Initialize FastAPI application
app = FastAPI(
    title="Storefront API",
    description="Payments, orders, products and users",
    version="1.0.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, error_code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or {}
        }
    )


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    """
    Handle domain errors with the standard envelope.

    The HTTP status comes from the exception class.
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(
            f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}",
            extra={"details": exc.details}
        )

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Malformed JSON and schema violations become 400 invalid_request.
    """
    errors = [
        {
            "location": [str(part) for part in error.get("loc", ())],
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    logger.warning(f"Invalid request on {request.method} {request.url.path}: {errors}")

    malformed = any(error["type"] == "json_invalid" for error in errors)
    return error_response(
        400,
        "invalid_request",
        "Request body is not valid JSON" if malformed else "Request validation failed",
        {"errors": errors}
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Routing errors: unknown path -> not_found, wrong method -> method_not_allowed."""
    if exc.status_code == 404:
        return error_response(404, "not_found", f"No route for {request.method} {request.url.path}")
    if exc.status_code == 405:
        return error_response(405, "method_not_allowed", f"Method {request.method} not allowed on {request.url.path}")
    return error_response(exc.status_code, "http_error", str(exc.detail))


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unexpected errors.

    Logs full exception for debugging but returns generic message to client.
    """
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)

    return error_response(
        500,
        "internal",
        "An unexpected error occurred",
        {"error_type": type(exc).__name__} if settings.debug else {}
    )


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        Server status and version information
    """
    return {
        "status": "healthy",
        "version": "1.0.0",
    }


# Include API routers
app.include_router(payments_router, prefix="/api/v1/payments", tags=["Payments"])
app.include_router(orders_router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(products_router, prefix="/api/v1/products", tags=["Products"])
app.include_router(users_router, prefix="/api/v1/users", tags=["Users"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
