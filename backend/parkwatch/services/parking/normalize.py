"""Map raw payload entries to ParkingLot. Values pass through unchanged; no coercion or validation."""
from typing import Any

from parkwatch.services.parking.types import ParkingLot


def normalize_lot(raw: Any) -> ParkingLot:
    d = raw if isinstance(raw, dict) else {}
    return ParkingLot(
        name=d.get("name"),
        address=d.get("address"),
        free_parking_number=d.get("freeParkingNumber"),
    )


def normalize_lots(raw_lots: list[Any]) -> list[ParkingLot]:
    """One ParkingLot per raw entry, same order and count."""
    return [normalize_lot(r) for r in raw_lots]


def snapshot_to_rows(snapshot: list[ParkingLot]) -> list[dict[str, Any]]:
    return [lot.to_dict() for lot in snapshot]


def snapshot_from_rows(rows: Any) -> list[ParkingLot] | None:
    """Stored parkingLots value back to ParkingLot list. None when nothing usable is stored."""
    if not isinstance(rows, list) or not rows:
        return None
    return [ParkingLot.from_dict(r) for r in rows if isinstance(r, dict)]
