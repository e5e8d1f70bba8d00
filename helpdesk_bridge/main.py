"""Main FastAPI application"""
from fastapi import FastAPI
from helpdesk_bridge.config import get_settings
from helpdesk_bridge.middleware.cors import setup_cors
from helpdesk_bridge.middleware.error_handler import ErrorHandlerMiddleware
from helpdesk_bridge.routers import forms, settings as settings_router
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Helpdesk Bridge API",
    description="Creates helpdesk conversations from form submissions",
    version="2.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Setup CORS
setup_cors(app)

# Add error handling middleware
app.add_middleware(ErrorHandlerMiddleware)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "helpdesk-bridge",
        "vendor": get_settings().helpdesk_vendor
    }


app.include_router(forms.router, prefix="/api/forms", tags=["Forms"])
app.include_router(settings_router.router, prefix="/api/settings", tags=["Helpdesk Settings"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
