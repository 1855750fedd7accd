"""Lot listing for display: search filter and pinning the selected lot first."""
from typing import Any

from parkwatch.core.constants import KEY_PARKING_LOTS, KEY_SELECTED_LOT
from parkwatch.services.parking.normalize import snapshot_from_rows
from parkwatch.services.parking.types import ParkingLot
from parkwatch.services.store import KeyValueStore


def _matches(lot: ParkingLot, query: str) -> bool:
    name = str(lot.name or "").lower()
    address = str(lot.address or "").lower()
    return query in name or query in address


def filter_lots(snapshot: list[ParkingLot], query: str | None) -> list[ParkingLot]:
    """Case-insensitive substring match on name or address. Empty query keeps all."""
    q = (query or "").strip().lower()
    if not q:
        return list(snapshot)
    return [lot for lot in snapshot if _matches(lot, q)]


def pin_selected(lots: list[ParkingLot], selected_lot: str | None) -> list[ParkingLot]:
    """Move the selected lot (first match) to the front; order of the rest unchanged."""
    if not selected_lot:
        return lots
    for i, lot in enumerate(lots):
        if lot.name == selected_lot:
            return [lot] + lots[:i] + lots[i + 1:]
    return lots


def list_lots(store: KeyValueStore, query: str | None = None) -> dict[str, Any]:
    """
    Current snapshot for display. Selected lot is pinned only when not searching.
    Returns {lots: [...], selected_lot, has_snapshot}.
    """
    data = store.get_many([KEY_PARKING_LOTS, KEY_SELECTED_LOT])
    snapshot = snapshot_from_rows(data.get(KEY_PARKING_LOTS))
    selected = data.get(KEY_SELECTED_LOT)
    if snapshot is None:
        return {"lots": [], "selected_lot": selected, "has_snapshot": False}
    lots = filter_lots(snapshot, query)
    if not (query or "").strip():
        lots = pin_selected(lots, selected)
    return {
        "lots": [{**lot.to_dict(), "selected": lot.name == selected} for lot in lots],
        "selected_lot": selected,
        "has_snapshot": True,
    }
