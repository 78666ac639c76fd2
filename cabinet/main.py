from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
import time
import logging

from .api.deps import get_store
from .api.v1.auth import router as auth_router
from .api.v1.calendar import router as calendar_router
from .api.v1.dashboard import router as dashboard_router
from .api.v1.finance import router as finance_router
from .api.v1.navigation import router as navigation_router
from .api.v1.patients import router as patients_router
from .api.v1.users import router as users_router
from .core.config import settings
from .core.security import RouteRedirect
from .services.remote import create_remote_client

# Configure logging
logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the data store and the optional remote client."""
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Using {settings.STORE_BACKEND} store")

    try:
        get_store()
        logger.info("Data store ready")
    except Exception as e:
        logger.error(f"Failed to initialize data store: {str(e)}")
        raise

    app.state.remote_client = create_remote_client(settings)
    logger.info("Application startup complete")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    if app.state.remote_client is not None:
        await app.state.remote_client.aclose()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Scheduling, patient records and billing for a therapy practice",
    openapi_url="/api/v1/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Middleware setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Only add TrustedHostMiddleware in production, not in testing
if not settings.TESTING:
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=["localhost", "127.0.0.1", "*.localhost", "testserver"]
    )


# Custom middleware for request logging and timing
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # Log request
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )

    return response


# Exception handlers
@app.exception_handler(RouteRedirect)
async def route_redirect_handler(request: Request, exc: RouteRedirect):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "redirect_to": exc.redirect_to,
        },
        headers=exc.headers,
    )


@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "detail": getattr(exc, "detail", None) or "The requested resource was not found",
            "path": str(request.url.path)
        }
    )


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred"
        }
    )


# Include routers
for router in (
    auth_router,
    navigation_router,
    calendar_router,
    patients_router,
    finance_router,
    dashboard_router,
    users_router,
):
    app.include_router(router, prefix="/api/v1")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.VERSION
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": f"Welcome to {settings.APP_NAME} API",
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/health"
    }


# API Info endpoint
@app.get("/api/v1/info")
async def api_info():
    """API information endpoint."""
    return {
        "name": settings.APP_NAME,
        "version": settings.VERSION,
        "store_backend": settings.STORE_BACKEND,
        "remote_backend_configured": settings.remote_backend_configured,
        "endpoints": {
            "authentication": "/api/v1/auth",
            "navigation": "/api/v1/navigation",
            "calendar": "/api/v1/calendar",
            "patients": "/api/v1/patients",
            "finance": "/api/v1/finance",
            "dashboard": "/api/v1/dashboard",
            "users": "/api/v1/admin/users",
            "docs": "/docs",
            "openapi": "/api/v1/openapi.json"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cabinet.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
