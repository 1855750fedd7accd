"""
Fetch cycle: fetch -> extract -> normalize -> persist snapshot -> badge -> history sample.

Runs every PARKING_REFRESH_INTERVAL_SECONDS from the scheduler and on demand from
POST /parking/refresh. Single-flight: while one cycle is in flight, another call returns
status "skipped" immediately instead of running a second cycle against the same store keys.

Failure policy (nothing is raised to callers):
- FetchError / ExtractionError: logged, prior snapshot kept, next tick proceeds normally.
- PersistenceError: logged, rest of this cycle aborted, no retry within the cycle.
"""
import logging
import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Callable

from sqlalchemy.orm import Session

from parkwatch.core.constants import KEY_PARKING_LOTS, KEY_SELECTED_LOT
from parkwatch.core.errors import ExtractionError, FetchError, PersistenceError
from parkwatch.db.session import SessionLocal
from parkwatch.services.badge import update_badge
from parkwatch.services.history import record_sample
from parkwatch.services.parking import ParkingClient, fetch_snapshot, snapshot_to_rows
from parkwatch.services.store import KeyValueStore

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_NOT_FOUND = "not_found"
STATUS_FETCH_ERROR = "fetch_error"
STATUS_STORE_ERROR = "store_error"
STATUS_SKIPPED = "skipped"

_lock = threading.Lock()
_last_result: "RefreshResult | None" = None


@dataclass
class RefreshResult:
    status: str
    lot_count: int = 0
    history_saved: bool = False
    error: str | None = None
    finished_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def is_refresh_in_flight() -> bool:
    return _lock.locked()


def get_last_refresh_result() -> RefreshResult | None:
    return _last_result


def _run_cycle(db: Session, client: ParkingClient | None, now: datetime | None) -> RefreshResult:
    try:
        snapshot = fetch_snapshot(client)
    except FetchError as e:
        logger.warning("Parking fetch failed (status=%s): %s", e.status_code, e)
        return RefreshResult(status=STATUS_FETCH_ERROR, error=str(e))
    except ExtractionError as e:
        logger.warning("No parking lots found in response: %s", e)
        return RefreshResult(status=STATUS_NOT_FOUND, error=str(e))

    store = KeyValueStore(db)
    try:
        store.set(KEY_PARKING_LOTS, snapshot_to_rows(snapshot))
        logger.info("Parking snapshot saved: %s lots", len(snapshot))
        update_badge(store, snapshot)
        selected = store.get(KEY_SELECTED_LOT)
        sample = record_sample(store, snapshot, selected, now=now)
    except PersistenceError as e:
        logger.error("Parking store failed; cycle aborted: %s", e, exc_info=True)
        return RefreshResult(status=STATUS_STORE_ERROR, lot_count=len(snapshot), error=str(e))
    return RefreshResult(status=STATUS_OK, lot_count=len(snapshot), history_saved=sample is not None)


def refresh(
    *,
    client: ParkingClient | None = None,
    session_factory: Callable[[], Session] = SessionLocal,
    now: datetime | None = None,
) -> RefreshResult:
    """One fetch cycle. Returns status "skipped" if another cycle is already running."""
    global _last_result
    if not _lock.acquire(blocking=False):
        logger.info("Parking refresh already in flight; skipping")
        return RefreshResult(status=STATUS_SKIPPED)
    try:
        db = session_factory()
        try:
            result = _run_cycle(db, client, now)
        finally:
            db.close()
        result.finished_at = (now or datetime.now()).isoformat()
        _last_result = result
        return result
    finally:
        _lock.release()


def run_parking_refresh_job() -> None:
    """Scheduler entrypoint. Never raises (APScheduler would only log it anyway)."""
    try:
        result = refresh()
        logger.debug("Parking refresh job: %s", result.status)
    except Exception as e:
        logger.exception("Parking refresh job failed: %s", e)
