"""Main FastAPI application"""
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from contextlib import asynccontextmanager
from typing import Optional
import logging

from formrelay.config import Settings, get_settings
from formrelay.middleware.cors import setup_cors
from formrelay.middleware.error_handler import ErrorHandlerMiddleware, setup_error_handlers
from formrelay.routers import submit
from formrelay.services.pipeline import SubmissionPipeline

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings = app.state.settings
    logger.info(
        f"formrelay starting ({settings.environment}) - transport={settings.email_transport}, "
        f"recaptcha={'configured' if settings.recaptcha_secret else 'MISSING SECRET'}"
    )
    yield
    logger.info("formrelay stopped")


def create_app(
    settings: Optional[Settings] = None,
    pipeline: Optional[SubmissionPipeline] = None
) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        settings: Settings to bind; read from the environment when omitted
        pipeline: Prebuilt pipeline, mainly for tests

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="formrelay",
        description="Relays public web form submissions to email",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.pipeline = pipeline or SubmissionPipeline(settings)

    # Setup CORS
    setup_cors(app, settings)

    # Add error handling
    app.add_middleware(ErrorHandlerMiddleware)
    setup_error_handlers(app, expose_bot_score=settings.expose_bot_score)

    # Health check endpoints
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Health check endpoint"""
        return "OK"

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "formrelay",
            "transport": app.state.pipeline.transport.name
        }

    app.include_router(submit.router, prefix="/api", tags=["Submit"])

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
