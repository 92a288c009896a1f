"""Session persistence.

The engine only ever talks to ``SessionRepository``. The repository maps a
room code to a key and (de)serializes sessions; the key-value store
underneath is swappable: the SQL store backs the running server, the memory
store backs single-process runs and tests.
"""
import json
import threading
import time
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from codewords import db
from codewords.game.errors import NotFound, StoreUnavailable
from codewords.game.session import GameSession
from codewords.models import SessionRecord

DEFAULT_TTL_SEC = 60 * 60 * 24
DEFAULT_KEY_PREFIX = 'game:'


class KeyValueStore:
    """get/put/exists/delete with per-key expiry. Expired keys read as absent."""

    def put(self, key: str, value: str, ttl: int) -> None:
        raise NotImplementedError

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, clock=time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._data = {}

    def put(self, key, value, ttl):
        with self._lock:
            self._data[key] = (value, self._clock() + ttl)

    def get(self, key):
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= self._clock():
                del self._data[key]
                return None
            return value

    def delete(self, key):
        with self._lock:
            self._data.pop(key, None)


class SqlKeyValueStore(KeyValueStore):
    """Key-value records in the ``session_record`` table.

    Each call runs in its own app context so it gets its own scoped session,
    whichever thread the caller is on.
    """

    def __init__(self, app, clock=time.time):
        self.app = app
        self._clock = clock

    @contextmanager
    def _session(self):
        with self.app.app_context():
            try:
                yield db.session
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise StoreUnavailable('Game storage is unavailable') from exc

    def put(self, key, value, ttl):
        now = self._clock()
        with self._session() as session:
            record = session.get(SessionRecord, key)
            if record is None:
                record = SessionRecord(key=key)
                session.add(record)
            record.value = value
            record.updated_at = now
            record.expires_at = now + ttl
            session.commit()

    def get(self, key):
        with self._session() as session:
            record = session.get(SessionRecord, key)
            if record is None:
                return None
            if record.is_expired(self._clock()):
                session.delete(record)
                session.commit()
                return None
            return record.value

    def delete(self, key):
        with self._session() as session:
            session.query(SessionRecord).filter_by(key=key).delete()
            session.commit()

    def purge_expired(self) -> int:
        with self._session() as session:
            count = (
                session.query(SessionRecord)
                .filter(SessionRecord.expires_at <= self._clock())
                .delete(synchronize_session=False)
            )
            session.commit()
            return count


def build_store(app) -> KeyValueStore:
    backend = app.config.get('STORE_BACKEND', 'sql')
    if backend == 'memory':
        return MemoryKeyValueStore()
    if backend == 'sql':
        return SqlKeyValueStore(app)
    raise ValueError(f'Unknown STORE_BACKEND: {backend}')


class SessionRepository:
    def __init__(self, store: KeyValueStore, ttl=DEFAULT_TTL_SEC, prefix=DEFAULT_KEY_PREFIX):
        self.store = store
        self.ttl = ttl
        self.prefix = prefix

    def key_for(self, code: str) -> str:
        return f'{self.prefix}{code.upper()}'

    def load(self, code: str) -> GameSession:
        raw = self.store.get(self.key_for(code))
        if raw is None:
            raise NotFound('Game not found')
        try:
            return GameSession.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as exc:
            raise NotFound('Game record is unreadable') from exc

    def save(self, session: GameSession) -> None:
        payload = json.dumps(session.to_dict(), separators=(',', ':'))
        self.store.put(self.key_for(session.code), payload, self.ttl)

    def exists(self, code: str) -> bool:
        return self.store.exists(self.key_for(code))

    def delete(self, code: str) -> None:
        self.store.delete(self.key_for(code))
