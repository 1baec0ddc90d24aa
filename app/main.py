from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.routers import catalog, meta, stream
from app.config.catalogs import CATALOGS
from app.config.settings import get_settings
from app.manifest import get_manifest, ADDON_VERSION
from app.providers.common import ProviderFactory
from app.schemas.stremio import HealthResponse, Manifest
import os
import traceback
import logging
import sys
from datetime import datetime

settings = get_settings()

# Robust logging configuration with fallback when file writing is not permitted
FILE_LOG_ENABLED = False

handlers = []

# Always log to console
console_handler = logging.StreamHandler(sys.stdout)
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
console_handler.setFormatter(formatter)
handlers.append(console_handler)

# Try to add file handler if enabled
if settings.log_to_file:
    try:
        os.makedirs(os.path.dirname(settings.log_file) or ".", exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)
        FILE_LOG_ENABLED = True
    except OSError:
        # Fall back to console-only if file cannot be opened (e.g., permission denied)
        FILE_LOG_ENABLED = False

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    handlers=handlers
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="France.tv for Stremio",
    description="Stremio add-on for France Télévisions replays and live channels",
    version=ADDON_VERSION
)

# Stremio clients need proper CORS preflight (OPTIONS) handling
# Note: allow_credentials=False is required when using wildcard origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status and duration"""
    start_time = datetime.now()
    logger.info(f"🔍 REQUEST: {request.method} {request.url}")

    response = await call_next(request)

    process_time = (datetime.now() - start_time).total_seconds()
    logger.info(f"✅ RESPONSE: {response.status_code} in {process_time:.3f}s")
    return response


# Global exception handler for unhandled exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler that logs everything"""
    logger.error("🚨 GLOBAL EXCEPTION HANDLER TRIGGERED")
    logger.error(f"   Request: {request.method} {request.url}")
    logger.error(f"   Exception Type: {type(exc).__name__}")
    logger.error(f"   Exception Message: {str(exc)}")
    logger.error("   Full Traceback:")
    logger.error(traceback.format_exc())

    note = "Check logs for full details"
    if FILE_LOG_ENABLED:
        note = f"Check {settings.log_file} for full details"

    return JSONResponse(
        status_code=500,
        content={
            "error": "Unhandled Exception",
            "message": str(exc),
            "type": type(exc).__name__,
            "timestamp": datetime.now().isoformat(),
            "path": str(request.url),
            "note": note
        }
    )


# Include routers
app.include_router(catalog.router, prefix="", tags=["catalog"])
app.include_router(meta.router, prefix="", tags=["meta"])
app.include_router(stream.router, prefix="", tags=["stream"])


@app.on_event("startup")
async def startup_banner():
    logger.info("[Addon] ========================================")
    logger.info(f"[Addon] France.tv Addon v{ADDON_VERSION} started")
    logger.info(f"[Addon] Public URL: {settings.addon_url}")
    logger.info(f"[Addon] Manifest: {settings.addon_url}/manifest.json")
    logger.info("[Addon] Catalogs: " + ", ".join(c["name"] for c in CATALOGS))
    logger.info("[Addon] Note: DRM protected videos cannot be played")
    logger.info("[Addon] ========================================")


@app.on_event("shutdown")
async def close_providers():
    ProviderFactory.reset()


@app.get("/manifest.json", response_model=Manifest, response_model_exclude_none=True)
async def manifest():
    try:
        manifest_data = get_manifest()
        logger.info("✅ Manifest generated successfully")
        return manifest_data
    except Exception as e:
        logger.error(f"❌ Error generating manifest: {e}")
        logger.error(traceback.format_exc())
        raise


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", addon="France.tv", version=ADDON_VERSION)


@app.get("/")
async def root():
    return {"message": "France.tv for Stremio API"}
