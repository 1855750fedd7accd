"""Badge / indicator for the selected lot: free count as text plus a severity colour."""
import logging
from typing import Any

from parkwatch.core.constants import (
    COLOR_NO_DATA,
    KEY_BADGE,
    KEY_PARKING_LOTS,
    KEY_SELECTED_LOT,
    SEVERITY_DEFAULT,
    SEVERITY_THRESHOLDS,
)
from parkwatch.services.parking.normalize import snapshot_from_rows
from parkwatch.services.parking.types import ParkingLot, find_lot
from parkwatch.services.store import KeyValueStore

logger = logging.getLogger(__name__)

EMPTY_BADGE: dict[str, Any] = {"text": "", "color": None, "severity": None}


def severity(value: Any) -> tuple[str, str] | None:
    """(severity, color) for a free count: 0 red, <20 orange, <30 yellow, else green. None if not numeric."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    for below, name, color in SEVERITY_THRESHOLDS:
        if value < below:
            return name, color
    return SEVERITY_DEFAULT


def severity_color(value: Any) -> str:
    """Chart bar colour; grey for hours without data."""
    sev = severity(value)
    return sev[1] if sev else COLOR_NO_DATA


def compute_badge(snapshot: list[ParkingLot] | None, selected_lot: str | None) -> dict[str, Any]:
    lot = find_lot(snapshot, selected_lot)
    if lot is None:
        return dict(EMPTY_BADGE)
    sev = severity(lot.free_parking_number)
    return {
        "text": str(lot.free_parking_number) if lot.free_parking_number is not None else "",
        "color": sev[1] if sev else None,
        "severity": sev[0] if sev else None,
    }


def update_badge(store: KeyValueStore, snapshot: list[ParkingLot] | None = None) -> dict[str, Any]:
    """Recompute the badge from the stored selection (and snapshot unless given) and persist it."""
    data = store.get_many([KEY_PARKING_LOTS, KEY_SELECTED_LOT])
    if snapshot is None:
        snapshot = snapshot_from_rows(data.get(KEY_PARKING_LOTS))
    badge = compute_badge(snapshot, data.get(KEY_SELECTED_LOT))
    store.set(KEY_BADGE, badge)
    logger.debug("Badge updated: %s", badge)
    return badge
