"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.api.rate_limit import limiter
from app.middleware.error_handler import ErrorHandlerMiddleware
from app.api.v1.routers import orchards, phenology

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Thresholds: leaf_wetness={settings.leaf_wetness_moderate_hours}/"
                f"{settings.leaf_wetness_high_hours}h, "
                f"wind<={settings.spray_max_wind_speed_ms}m/s, "
                f"temp={settings.spray_min_temperature_c}-{settings.spray_max_temperature_c}°C, "
                f"traps>{settings.pest_trap_weekly_threshold}/week")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    yield

    # Shutdown
    from app.infrastructure.stage_repository import get_stage_repository
    logger.info("Shutting down application...")
    repository = get_stage_repository()
    await repository.close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Orchard Decision Engine API

    Turns environmental readings from an apple orchard into an actionable
    diagnostic: development stage, disease risk, spray window and
    recommendations.

    ## Decision Rules

    1. **Phenology**: the BBCH stage with the highest heat unit threshold
       reached; the lowest stage before any threshold is reached
    2. **Disease risk**: leaf wetness above 5 h is Moderate, above 10 h High
    3. **Spray window**: closed when wind exceeds 5 m/s or temperature is
       below 10°C or above 25°C; every failing condition is reported
    4. **Recommendations**: scab protection, spraying prohibited and codling
       moth treatment, in that order, or routine monitoring when none apply

    A stage table failure degrades to a dormant fallback stage and never
    blocks the other results.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(orchards.router, prefix="/api/v1")
app.include_router(phenology.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
