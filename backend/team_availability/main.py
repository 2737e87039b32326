"""
FastAPI app entrypoint.

Serves the participant/availability API under /api. Rendering and static assets live
elsewhere; this process only owns the two stores and their rules.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from team_availability import __version__
from team_availability.api.routes import admin, auth, availability, people
from team_availability.config import settings
from team_availability.core.constants import API_PREFIX
from team_availability.core.errors import AvailabilityError, availability_error_handler
from team_availability.db.session import SessionLocal, create_all
from team_availability.services.seed_service import seed_if_empty

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.database_url.startswith("sqlite"):
        # Local file DB: no alembic run needed
        create_all()
    if settings.seed_on_startup:
        db = SessionLocal()
        try:
            seed_if_empty(db)
        finally:
            db.close()
    if not settings.admin_secret:
        logger.warning("ADMIN_SECRET is not set; privileged view is disabled")
    logger.info(
        "Backend ready: window %s-%02d..%02d",
        settings.calendar_year,
        settings.start_month,
        settings.end_month,
    )
    yield


app = FastAPI(title="Team Availability", version=__version__, lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the deployed frontend
_cors_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_cors_origins.extend(settings.cors_origin_list())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AvailabilityError, availability_error_handler)

app.include_router(people.router, prefix=API_PREFIX, tags=["people"])
app.include_router(auth.router, prefix=API_PREFIX, tags=["auth"])
app.include_router(availability.router, prefix=API_PREFIX, tags=["availability"])
app.include_router(admin.router, prefix=API_PREFIX, tags=["admin"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Team Availability API", "docs": "/docs", "health": "/health"}


@app.get("/health")
@app.get(f"{API_PREFIX}/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
