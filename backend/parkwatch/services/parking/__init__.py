"""Parking page: fetch, extract from the streamed body, normalize into a snapshot."""
from parkwatch.core.errors import ExtractionError
from parkwatch.services.parking.client import ParkingClient
from parkwatch.services.parking.config import ParkingConfig
from parkwatch.services.parking.normalize import normalize_lots, snapshot_from_rows, snapshot_to_rows
from parkwatch.services.parking.stream import extract_parking_lots
from parkwatch.services.parking.types import ParkingLot, find_lot

default_client = ParkingClient()


def fetch_snapshot(client: ParkingClient | None = None) -> list[ParkingLot]:
    """
    Fetch and parse one snapshot. Raises FetchError from the client and ExtractionError when
    no candidate line yields lots (or the payload list is empty).
    """
    body = (client or default_client).fetch_text()
    raw = extract_parking_lots(body)
    if not raw:
        raise ExtractionError("No parkingLots payload found in response")
    return normalize_lots(raw)


__all__ = [
    "ParkingClient",
    "ParkingConfig",
    "ParkingLot",
    "default_client",
    "extract_parking_lots",
    "fetch_snapshot",
    "find_lot",
    "normalize_lots",
    "snapshot_from_rows",
    "snapshot_to_rows",
]
