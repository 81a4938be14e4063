"""
Practice Time Backend - Main Application
Serves timezone normalization for the practice-management calendar UI
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables FIRST so settings see .env values
load_dotenv()

from practice_time.config import get_timezone_settings  # noqa: E402
from practice_time.api import timezone_routes  # noqa: E402
from practice_time.timezone import UTC, ensure_zone  # noqa: E402
from practice_time.utils.logging_config import configure_logging  # noqa: E402

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_timezone_settings()
    logger.info(
        f"Practice Time backend starting "
        f"(default zone {ensure_zone(settings.default_timezone)}, "
        f"fallback {settings.fallback_timezone})"
    )
    yield
    logger.info("Practice Time backend shutdown complete")


app = FastAPI(
    title="Practice Time Backend",
    description="""
Timezone normalization for a healthcare practice-management calendar.

## Features
- Zone validation with alias and label lookup
- UTC storage conversion with a fixed DST policy
- Deterministic display formatting
- Calendar event projection into the viewer's zone
""",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(timezone_routes.router)


@app.get("/health")
async def health_check():
    """Instant health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
    }
