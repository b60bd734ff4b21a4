"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from meal_tracker_api.api.routes import dashboard, estimates, meals, profile, recipes, suggestions
from meal_tracker_api.core.config import get_settings
from meal_tracker_api.core.exceptions import APIError
from meal_tracker_api.db.mongo import MongoDB
from meal_tracker_api.services.model_catalog import get_model_catalog

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.api_version}")
    logger.info(f"Connecting to MongoDB at {settings.mongo_uri[:20]}...")

    MongoDB.connect(settings.mongo_uri, settings.db_name)
    logger.info("MongoDB connected")
    try:
        await MongoDB.ensure_indexes()
    except PyMongoError as e:
        logger.error(f"Could not create MongoDB indexes: {e}")

    if not settings.is_llm_configured:
        logger.warning(
            f"No API key for LLM provider '{settings.llm_provider.value}'; estimates will fail"
        )

    yield

    # Shutdown
    logger.info("Shutting down...")
    await get_model_catalog().close()
    MongoDB.close()
    logger.info("MongoDB connection closed")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging(settings.debug)

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        description="Calorie and macro tracking API with AI-assisted meal estimation",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "details": exc.details,
            },
        )

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        from meal_tracker_api.agents.llm import get_llm_info

        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.api_version,
            "mongodb": MongoDB.is_connected(),
            "llm": get_llm_info(settings),
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    # Include routers
    app.include_router(meals.router, prefix="/meals", tags=["Meals"])
    app.include_router(estimates.router, prefix="/estimates", tags=["Estimates"])
    app.include_router(recipes.router, prefix="/recipes", tags=["Recipes"])
    app.include_router(suggestions.router, prefix="/suggestions", tags=["Suggestions"])
    app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
    app.include_router(profile.router, prefix="/profile", tags=["Profile"])

    return app


# Create app instance
app = create_app()
