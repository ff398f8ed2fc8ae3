"""
Podcast Transcribe API - FastAPI Backend

Main application entry point with CORS and routing configuration.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, settings as default_settings
from context import AppContext, build_context
from routers import channels_router, episodes_router

# Configure logging
logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    ctx: AppContext = app.state.context
    logger.info("Starting Podcast Transcribe API...")
    logger.info(f"Database: {ctx.registry.engine.url.render_as_string(hide_password=True)}")
    logger.info(f"Transcript storage: {ctx.settings.BLOB_BACKEND}")
    ctx.registry.init_schema()
    yield
    ctx.registry.engine.dispose()
    logger.info("Shutting down...")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400), not 422."""
    logger.info(f"Rejected request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """Build the application around an explicit context."""
    settings = settings or (context.settings if context else default_settings)
    context = context or build_context(settings)

    app = FastAPI(
        title="Podcast Transcribe API",
        description="Register podcast RSS feeds, list episodes and transcribe them with Deepgram",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.context = context

    # CORS for every origin on every route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    app.include_router(episodes_router)
    app.include_router(channels_router)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "name": "Podcast Transcribe API",
            "version": VERSION,
            "status": "running",
        }

    @app.get("/health")
    async def health():
        """Detailed health check."""
        return {
            "status": "healthy",
            "config": {
                "deepgram_model": settings.DEEPGRAM_MODEL,
                "translation_enabled": bool(settings.DEEPL_API_KEY),
                "translate": f"{settings.TRANSLATE_SOURCE_LANG}->{settings.TRANSLATE_TARGET_LANG}",
                "blob_backend": settings.BLOB_BACKEND,
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=True,
    )
