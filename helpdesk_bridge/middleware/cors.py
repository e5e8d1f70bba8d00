"""CORS middleware configuration"""
from fastapi.middleware.cors import CORSMiddleware
from helpdesk_bridge.config import get_settings


def setup_cors(app):
    """
    Configure CORS middleware so embedded forms on other sites can submit

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
