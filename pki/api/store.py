"""
Object store for tracking records.
Records are plain dictionaries addressed by their 'id' key, which may be a
composite such as [profileId, date]. Two backends share one interface:
an in-memory store and a SQLite file store.
"""

import json
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Hashable, List, Optional, Tuple

from ..logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class StoreSchema:
    """Key and index layout of one store."""
    auto_increment: bool = False
    indexes: Dict[str, Tuple[str, ...]] = field(default_factory=dict)


STORE_SCHEMAS: Dict[str, StoreSchema] = {
    'profiles': StoreSchema(auto_increment=True, indexes={'name': ('name',)}),
    'plans': StoreSchema(),
    'tasks': StoreSchema(auto_increment=True, indexes={'profileDate': ('profileId', 'date')}),
    'logs': StoreSchema(),
    'streaks': StoreSchema(),
}


def normalize_key(key: Any) -> Hashable:
    """Turn list keys into tuples so composite keys compare and hash."""
    if isinstance(key, (list, tuple)):
        return tuple(normalize_key(part) for part in key)
    return key


def _index_value(record: dict, fields: Tuple[str, ...]) -> Hashable:
    if len(fields) == 1:
        return normalize_key(record.get(fields[0]))
    return tuple(normalize_key(record.get(f)) for f in fields)


class ObjectStore(ABC):
    """Key-value record store with secondary indexes."""

    def __init__(self, schemas: Optional[Dict[str, StoreSchema]] = None):
        self.schemas = schemas or STORE_SCHEMAS

    def _schema(self, store: str) -> StoreSchema:
        if store not in self.schemas:
            raise KeyError(f"Unknown store: {store}")
        return self.schemas[store]

    @abstractmethod
    def get(self, store: str, key: Any) -> Optional[dict]:
        """Return the record stored under key, or None."""

    @abstractmethod
    def get_all(self, store: str) -> List[dict]:
        """Return all records of a store ordered by key."""

    @abstractmethod
    def put(self, store: str, record: dict) -> dict:
        """Insert or replace a record."""

    @abstractmethod
    def add(self, store: str, record: dict) -> dict:
        """Insert a new record; raises KeyError when the key already exists."""

    @abstractmethod
    def delete(self, store: str, key: Any) -> None:
        """Remove a record; missing keys are ignored."""

    def get_by_index(self, store: str, index: str, key: Any) -> List[dict]:
        """
        Return records whose indexed fields equal key.

        Args:
            store: Store name
            index: Index name from the store schema
            key: Value (or list of values for a compound index)

        Returns:
            Matching records ordered by primary key
        """
        schema = self._schema(store)
        if index not in schema.indexes:
            raise KeyError(f"Unknown index '{index}' on store '{store}'")

        fields = schema.indexes[index]
        wanted = normalize_key(key)
        return [r for r in self.get_all(store) if _index_value(r, fields) == wanted]


class MemoryStore(ObjectStore):
    """Store kept in process memory. Records are copied in and out."""

    def __init__(self, schemas: Optional[Dict[str, StoreSchema]] = None):
        super().__init__(schemas)
        self._data: Dict[str, Dict[Hashable, dict]] = {name: {} for name in self.schemas}
        self._counters: Dict[str, int] = {name: 0 for name in self.schemas}

    def _assign_key(self, store: str, record: dict) -> dict:
        schema = self._schema(store)
        record = deepcopy(record)
        if record.get('id') is None:
            if not schema.auto_increment:
                raise KeyError(f"Record for store '{store}' has no id")
            self._counters[store] += 1
            record['id'] = self._counters[store]
        elif schema.auto_increment and isinstance(record['id'], int):
            self._counters[store] = max(self._counters[store], record['id'])
        return record

    def get(self, store: str, key: Any) -> Optional[dict]:
        self._schema(store)
        record = self._data[store].get(normalize_key(key))
        return deepcopy(record) if record is not None else None

    def get_all(self, store: str) -> List[dict]:
        self._schema(store)
        items = self._data[store]
        return [deepcopy(items[k]) for k in sorted(items)]

    def put(self, store: str, record: dict) -> dict:
        record = self._assign_key(store, record)
        self._data[store][normalize_key(record['id'])] = record
        return deepcopy(record)

    def add(self, store: str, record: dict) -> dict:
        self._schema(store)
        if record.get('id') is not None and normalize_key(record['id']) in self._data[store]:
            raise KeyError(f"Key {record['id']!r} already exists in store '{store}'")
        return self.put(store, record)

    def delete(self, store: str, key: Any) -> None:
        self._schema(store)
        self._data[store].pop(normalize_key(key), None)


class SQLiteStore(ObjectStore):
    """
    Store persisted in a SQLite file.
    Every record is a JSON document in a single table keyed by (store, key).
    """

    def __init__(self, db_path: Path, schemas: Optional[Dict[str, StoreSchema]] = None):
        super().__init__(schemas)
        self.db_path = Path(db_path)
        self.init_db()

    @contextmanager
    def get_connection(self):
        """Context manager for database connections."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self):
        """Create the records table if needed."""
        with self.get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS records (
                    store TEXT NOT NULL,
                    key TEXT NOT NULL,
                    data TEXT NOT NULL,
                    PRIMARY KEY (store, key)
                )
            """)
            conn.commit()

    @staticmethod
    def _encode_key(key: Any) -> str:
        return json.dumps(key if not isinstance(key, tuple) else list(key))

    def _next_id(self, conn: sqlite3.Connection, store: str) -> int:
        ids = [
            json.loads(row['key'])
            for row in conn.execute("SELECT key FROM records WHERE store = ?", (store,))
        ]
        return max((i for i in ids if isinstance(i, int)), default=0) + 1

    def get(self, store: str, key: Any) -> Optional[dict]:
        self._schema(store)
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT data FROM records WHERE store = ? AND key = ?",
                (store, self._encode_key(key)),
            ).fetchone()
        return json.loads(row['data']) if row else None

    def get_all(self, store: str) -> List[dict]:
        self._schema(store)
        with self.get_connection() as conn:
            rows = conn.execute(
                "SELECT key, data FROM records WHERE store = ?", (store,)
            ).fetchall()
        pairs = [(normalize_key(json.loads(row['key'])), json.loads(row['data'])) for row in rows]
        return [record for _, record in sorted(pairs, key=lambda pair: pair[0])]

    def _write(self, store: str, record: dict, replace: bool) -> dict:
        schema = self._schema(store)
        record = dict(record)
        verb = "INSERT OR REPLACE" if replace else "INSERT"
        with self.get_connection() as conn:
            if record.get('id') is None:
                if not schema.auto_increment:
                    raise KeyError(f"Record for store '{store}' has no id")
                record['id'] = self._next_id(conn, store)
            try:
                conn.execute(
                    f"{verb} INTO records (store, key, data) VALUES (?, ?, ?)",
                    (store, self._encode_key(record['id']), json.dumps(record)),
                )
            except sqlite3.IntegrityError as e:
                raise KeyError(f"Key {record['id']!r} already exists in store '{store}'") from e
            conn.commit()
        return record

    def put(self, store: str, record: dict) -> dict:
        return self._write(store, record, replace=True)

    def add(self, store: str, record: dict) -> dict:
        return self._write(store, record, replace=False)

    def delete(self, store: str, key: Any) -> None:
        self._schema(store)
        with self.get_connection() as conn:
            conn.execute(
                "DELETE FROM records WHERE store = ? AND key = ?",
                (store, self._encode_key(key)),
            )
            conn.commit()
