"""Event Check-In Web Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from checkin.core.config import settings
from checkin.core.database import create_db_and_tables
from checkin.routes import checkin

# Configure logging
log_dir = Path(settings.log_dir).expanduser()
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting Event Check-In application")
    create_db_and_tables()
    yield
    logger.info("Event Check-In application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Unified attendee list and check-in desk for RSVP and ticketed events",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for scanning stations served from other origins
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(checkin.router)
app.add_exception_handler(checkin.AccessDenied, checkin.access_denied_handler)
app.add_exception_handler(checkin.EventMissing, checkin.event_missing_handler)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


def run():
    """Serve the application with uvicorn."""
    uvicorn.run("checkin.main:app", host=settings.host, port=settings.port, reload=settings.debug)
