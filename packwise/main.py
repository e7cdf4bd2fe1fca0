"""Packwise packing checklist service."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from packwise.checklist.persistence import snapshot_writer
from packwise.checklist.vault import load_vault
from packwise.core.config import settings
from packwise.core.database import create_db_and_tables, engine
from packwise.core.scheduler import shutdown_scheduler, start_scheduler
from packwise.routes import conditions, items, profile, sections, sessions

# Configure logging
settings.log_dir.mkdir(parents=True, exist_ok=True)
log_file = settings.log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup
    logger.info("Starting Packwise application")
    create_db_and_tables()
    with Session(engine) as session:
        load_vault(session, snapshot_writer, seed_builtins=settings.seed_builtins)
    start_scheduler()
    yield
    # Shutdown
    shutdown_scheduler()
    logger.info("Packwise application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Packing checklists that adapt to trip conditions through dependency rules",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for external access
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

# Include routers
app.include_router(sessions.router)
app.include_router(sections.router)
app.include_router(items.router)
app.include_router(conditions.router)
app.include_router(profile.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
