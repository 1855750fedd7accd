"""
FastAPI app entrypoint.

Polls the parking status page every PARKING_REFRESH_INTERVAL_SECONDS and serves the snapshot,
badge and hourly history statistics under /parking.
"""
import logging
import threading
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from parkwatch.api.routes import parking
from parkwatch.config import settings
from parkwatch.core.constants import PARKING_REFRESH_INTERVAL_SECONDS, PARKING_REFRESH_JOB_ID
from parkwatch.db.session import init_db
from parkwatch.scheduler.refresh_job import run_parking_refresh_job

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_scheduler = BackgroundScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.scheduler_enabled:
        _scheduler.add_job(
            run_parking_refresh_job,
            "interval",
            seconds=PARKING_REFRESH_INTERVAL_SECONDS,
            id=PARKING_REFRESH_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        _scheduler.start()
        app.state.scheduler = _scheduler

        # One tick on startup so the snapshot is filled before the first interval elapses.
        threading.Thread(target=run_parking_refresh_job, daemon=True).start()
        logger.info("Parking refresh scheduled every %ss", PARKING_REFRESH_INTERVAL_SECONDS)
    logger.info("Backend ready")
    yield
    if _scheduler.running:
        _scheduler.shutdown(wait=False)


app = FastAPI(title="Parkwatch", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(parking.router, prefix="/parking", tags=["parking"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Parkwatch API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
