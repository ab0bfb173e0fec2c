"""Volume Relay – FastAPI application entry-point."""

import logging

from fastapi import FastAPI

from src.volume_relay.config import settings
from src.volume_relay.router import health, upload

# Configure logging from settings
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
app = FastAPI(
    title="Volume Relay API",
    description="Relay multipart file uploads into Databricks Unity Catalog volumes.",
    version="1.0.0",
)

logger.info("Upload relay running in %s mode.", settings.environment)

# ── register routers ──
app.get('/')(lambda: {"message": "Welcome to the Volume Relay API! Visit /docs for API documentation."})
app.include_router(health.router)
app.include_router(upload.router)
