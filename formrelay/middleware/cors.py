"""CORS middleware configuration"""
from fastapi.middleware.cors import CORSMiddleware

from formrelay.config import Settings


def setup_cors(app, settings: Settings):
    """
    Configure CORS middleware for the application

    Args:
        app: FastAPI application instance
        settings: Settings carrying the allowed origins
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
