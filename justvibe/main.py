# ============================================================================
# FILE: justvibe/main.py
# ============================================================================
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from justvibe.api.router import api_router
from justvibe.core.errors import register_exception_handlers
from justvibe.core.logging import setup_logging
from justvibe.config import settings
import logging
import os

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app instance
app = FastAPI(
    title="JustVibe Backend",
    description="Music streaming API with favorites, playlists and user profiles",
    version="1.0.0"
)

# CORS middleware; any localhost origin is accepted outside production
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_origin_regex=None if settings.ENVIRONMENT == "production" else r"https?://localhost(:\d+)?",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router)

# Uploaded files (profile pictures)
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)

@app.on_event("startup")
async def startup_event():
    """Initialize services on startup"""
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})")
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    from justvibe.db.session import init_db
    init_db()

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info(f"Shutting down {settings.APP_NAME}")

@app.get("/health")
async def health_check():
    return {"status": "OK", "message": "JustVibe Backend is running"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
