"""
IMEDA Quote Engine API
FastAPI host for the seminar quote cost & pricing engine.
"""
import os
import logging
import time

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.services.logging_config import setup_logging
from app.services.middleware import RequestTimingMiddleware
from app.services.perf_monitor import tracker as perf_tracker

# Load .env in dev (no-op when the file is missing)
load_dotenv()

_log_level = os.getenv("LOG_LEVEL", "INFO")
_json_logs = os.getenv("LOG_FORMAT", "json").lower() != "text"
setup_logging(level=_log_level, json_output=_json_logs)
logger = logging.getLogger("imeda-quotes")

_PROCESS_START = time.monotonic()
APP_VERSION = "1.0.0"

app = FastAPI(
    title="IMEDA Quote Engine API",
    version=APP_VERSION,
    description="Seminar quote costing, profitability and multi-currency presentation",
)

# ---------------------------------------------------------------------------
# CORS — restricted to allowed origins from env
# ---------------------------------------------------------------------------
_cors_default = "http://localhost:3000,http://localhost:8000"
cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _cors_default).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", "X-Requested-With", "X-Request-ID"],
)
# Request timing + X-Request-ID must be outermost so it wraps all other middleware
app.add_middleware(RequestTimingMiddleware)

# Routers
from app.api.quote_routes import router as quote_router

app.include_router(quote_router)


@app.get("/health")
async def health_check():
    return {"status": "active", "version": APP_VERSION}


@app.get("/metrics")
async def metrics():
    """Engine call counts and timings from the in-process tracker."""
    return {
        "uptime_seconds": round(time.monotonic() - _PROCESS_START, 1),
        "engine": perf_tracker.get_metrics(),
    }


logger.info("Quote engine API ready")
