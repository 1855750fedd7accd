"""Snapshot record shape. Wire names match what the upstream page and the store use."""
from typing import Any


class ParkingLot:
    """One lot in a snapshot. name doubles as the key; values pass through as the upstream sent them."""

    __slots__ = ("name", "address", "free_parking_number")

    def __init__(self, *, name: Any, address: Any, free_parking_number: Any):
        self.name = name
        self.address = address
        self.free_parking_number = free_parking_number

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParkingLot):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"ParkingLot(name={self.name!r}, free={self.free_parking_number!r})"

    def to_dict(self) -> dict[str, Any]:
        """Format for the store: { name, address, freeParkingNumber }."""
        return {
            "name": self.name,
            "address": self.address,
            "freeParkingNumber": self.free_parking_number,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ParkingLot":
        return cls(
            name=d.get("name"),
            address=d.get("address"),
            free_parking_number=d.get("freeParkingNumber"),
        )


def find_lot(snapshot: list[ParkingLot] | None, name: str | None) -> ParkingLot | None:
    """First lot whose name equals name, or None (no snapshot, no selection, or not present)."""
    if not snapshot or not name:
        return None
    return next((lot for lot in snapshot if lot.name == name), None)
