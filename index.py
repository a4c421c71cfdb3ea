import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from config.component_library import get_supported_component_names
from routes.canvas import router as canvas_router
from routes.generation import router as generation_router
from routes.previews import router as previews_router
from services.generation_client import get_generation_client
from services.preview_store import get_preview_store

# Configure logging
log_handlers = [logging.StreamHandler()]
if settings.LOG_FILE:
    log_handlers.append(logging.FileHandler(settings.LOG_FILE))

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=log_handlers
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="UI Prototyper Backend",
    description="Natural-language UI descriptions -> generated React components -> sandboxed live previews",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["content-disposition", "retry-after"]
)

# Include routers
app.include_router(generation_router)
app.include_router(previews_router)
app.include_router(canvas_router)


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    try:
        client = get_generation_client()
        store = get_preview_store()
        logger.info("✅ UI Prototyper Backend started successfully")
        logger.info(f"✅ Model: {client.model_name}")
        logger.info(f"✅ Preview store: {type(store).__name__}")
        if not client.is_configured:
            logger.info("No API key configured, generation will return fallback components")
    except Exception as e:
        logger.error(f"❌ Failed to initialize UI Prototyper Backend: {e}")
        raise


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    logger.debug("Health check requested")
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "model": settings.GEMINI_MODEL,
        "api_key_configured": bool(settings.GEMINI_API_KEY),
        "preview_store": settings.PREVIEW_STORE_BACKEND,
    }


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "UI Prototyper Backend API",
        "version": "1.0.0",
        "model": settings.GEMINI_MODEL,
        "endpoints": {
            "generate": "/api/generate",
            "preview": "/api/previews/{id}",
            "preview_page": "/preview/{id}",
            "sandbox": "/api/previews/{id}/sandbox",
            "snapshot": "/api/previews/{id}/snapshot",
            "test_api": "/api/test-api",
            "canvas": "/api/canvas/sessions",
            "health": "/health",
        },
        "rate_limit": f"{settings.RATE_LIMIT_REQUESTS} requests per {settings.RATE_LIMIT_WINDOW} seconds",
        "supported_components": get_supported_component_names(),
        "snapshot_formats": ["png", "jpg", "webp"],
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
