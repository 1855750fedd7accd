from parkwatch.services.badge import compute_badge, update_badge
from parkwatch.services.lots import list_lots
from parkwatch.services.store import KeyValueStore

__all__ = ["KeyValueStore", "compute_badge", "list_lots", "update_badge"]
