"""
Key/value store over the kv_store table. Values are JSON; each key is replaced wholesale
(last write wins). set_many commits several keys in one transaction so a history day map
and lastSavedHistory never drift apart.
"""
import json
import logging
from typing import Any, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from parkwatch.core.errors import PersistenceError
from parkwatch.models.key_value import KeyValue

logger = logging.getLogger(__name__)


class KeyValueStore:
    """JSON values keyed by string. Wraps SQLAlchemy failures as PersistenceError."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, key: str, default: Any = None) -> Any:
        return self.get_many([key]).get(key, default)

    def get_many(self, keys: Iterable[str]) -> dict[str, Any]:
        """Return {key: value} for the keys that exist. Missing keys are absent from the result."""
        keys = list(keys)
        if not keys:
            return {}
        try:
            rows = self._db.query(KeyValue).filter(KeyValue.key.in_(keys)).all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"read failed for {keys}: {e}") from e
        out: dict[str, Any] = {}
        for row in rows:
            try:
                out[row.key] = json.loads(row.value_json)
            except (TypeError, json.JSONDecodeError):
                logger.warning("kv_store: dropping undecodable value for key %s", row.key)
        return out

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, values: dict[str, Any]) -> None:
        if not values:
            return
        try:
            existing = {
                row.key: row
                for row in self._db.query(KeyValue).filter(KeyValue.key.in_(list(values))).all()
            }
            for key, value in values.items():
                js = json.dumps(value, ensure_ascii=False)
                row = existing.get(key)
                if row:
                    row.value_json = js
                else:
                    self._db.add(KeyValue(key=key, value_json=js))
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise PersistenceError(f"write failed for {list(values)}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._db.query(KeyValue).filter(KeyValue.key == key).delete()
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise PersistenceError(f"delete failed for {key}: {e}") from e
