"""
Parking API: snapshot listing, lot selection, badge, on-demand refresh and hourly statistics.

All routes are mounted under /parking.
"""
import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from parkwatch.core.constants import (
    KEY_BADGE,
    KEY_SELECTED_LOT,
    PARKING_REFRESH_INTERVAL_SECONDS,
    PARKING_REFRESH_JOB_ID,
)
from parkwatch.core.errors import ParkwatchError, error_to_http
from parkwatch.db.session import get_db
from parkwatch.scheduler.refresh_job import get_last_refresh_result, is_refresh_in_flight, refresh
from parkwatch.services.badge import severity_color, update_badge
from parkwatch.services.history import hourly_stats_from_store, weekday_of
from parkwatch.services.lots import list_lots
from parkwatch.services.store import KeyValueStore

router = APIRouter()
logger = logging.getLogger(__name__)


class SelectLotBody(BaseModel):
    name: str = Field(..., min_length=1, max_length=256, description="Lot name as shown in the snapshot")


def _next_refresh_iso(request: Request) -> str:
    """Next parking refresh job run time (UTC ISO). Fallback if scheduler not ready."""
    fallback = (datetime.now(timezone.utc) + timedelta(seconds=PARKING_REFRESH_INTERVAL_SECONDS)).isoformat()
    scheduler = getattr(request.app.state, "scheduler", None)
    if not scheduler:
        return fallback
    job = scheduler.get_job(PARKING_REFRESH_JOB_ID)
    if job and getattr(job, "next_run_time", None):
        at = job.next_run_time
        if at.tzinfo is None:
            at = at.replace(tzinfo=timezone.utc)
        return at.isoformat()
    return fallback


@router.get("/lots")
def get_lots(q: str | None = Query(None, description="Filter by name or address"), db: Session = Depends(get_db)):
    """Current snapshot. Selected lot is pinned first unless q is given."""
    try:
        out = list_lots(KeyValueStore(db), q)
    except ParkwatchError as e:
        raise error_to_http(e)
    if not out["has_snapshot"]:
        out["message"] = "No data available. Background job fetching..."
    elif not out["lots"]:
        out["message"] = "No parking lots found matching your search."
    return out


@router.get("/selected")
def get_selected(db: Session = Depends(get_db)):
    try:
        store = KeyValueStore(db)
        data = store.get_many([KEY_SELECTED_LOT, KEY_BADGE])
    except ParkwatchError as e:
        raise error_to_http(e)
    return {"selected_lot": data.get(KEY_SELECTED_LOT), "badge": data.get(KEY_BADGE)}


@router.put("/selected")
def put_selected(body: SelectLotBody, db: Session = Depends(get_db)):
    """Track a lot for the badge and history. Not checked against the current snapshot."""
    name = body.name.strip()
    try:
        store = KeyValueStore(db)
        store.set(KEY_SELECTED_LOT, name)
        badge = update_badge(store)
    except ParkwatchError as e:
        raise error_to_http(e)
    logger.info("Selected lot set to %r", name)
    return {"selected_lot": name, "badge": badge}


@router.get("/badge")
def get_badge(db: Session = Depends(get_db)):
    """Recompute the badge from the stored snapshot and selection."""
    try:
        return update_badge(KeyValueStore(db))
    except ParkwatchError as e:
        raise error_to_http(e)


@router.post("/refresh")
def refresh_now():
    """Run one fetch cycle now. Returns the cycle result; "skipped" if one is already running."""
    return refresh().to_dict()


@router.get("/refresh/status")
def refresh_status(request: Request):
    last = get_last_refresh_result()
    return {
        "in_flight": is_refresh_in_flight(),
        "last": last.to_dict() if last else None,
        "next_refresh_at": _next_refresh_iso(request),
    }


@router.get("/stats")
def get_stats(
    day: int | None = Query(None, ge=0, le=6, description="Weekday, Sunday=0. Defaults to today"),
    period: str = Query("full", description="full | day | night"),
    metric: str = Query("average", description="max | min | average"),
    lot: str | None = Query(None, description="Lot name. Defaults to the selected lot"),
    live: bool = Query(False, description="Overlay the current hour with the live count"),
    db: Session = Depends(get_db),
):
    """One value per hour (null = no samples) for the lot, plus bar colours and has_data."""
    store = KeyValueStore(db)
    try:
        lot_name = lot or store.get(KEY_SELECTED_LOT)
        if day is None:
            day = weekday_of(datetime.now())
        stats = hourly_stats_from_store(store, day, period, lot_name, metric, live=live)
    except (ValueError, ParkwatchError) as e:
        raise error_to_http(e)
    out = {
        "day": stats.day,
        "period": stats.period,
        "metric": stats.metric,
        "lot": stats.lot_name,
        "labels": stats.labels,
        "hours": [{"day": d, "hour": h} for d, h in stats.hours],
        "values": stats.values,
        "colors": [severity_color(v) for v in stats.values],
        "has_data": stats.has_data,
        "live_index": stats.live_index,
    }
    if not stats.has_data:
        out["message"] = f"No history specific to {lot_name or 'Unknown'} for this day."
    return out
