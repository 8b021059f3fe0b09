"""
Server-side registry of refresh tokens that may still be exchanged.

A token is honourable only while a SessionRecord exists for it here; the
signature check in TokenCodec is necessary but not sufficient. Records are
never updated in place: rotation deletes the old record and registers a new
one under the new token string.

MemorySessionStore is the process-wide implementation. It starts empty and
disappears with the process, so a restart invalidates every refresh token.
Anything that honours the SessionStore interface (for example a networked
key-value store) can replace it without touching SessionService.
"""
from __future__ import annotations

import abc
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional

from utils.security import utcnow


@dataclass(frozen=True)
class SessionRecord:
    token: str
    user_id: int
    ip_address: str
    device_id: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def matches(self, ip_address: str, device_id: str) -> bool:
        return self.ip_address == ip_address and self.device_id == device_id


class SessionStore(abc.ABC):
    """Interface of the refresh-token registry."""

    @abc.abstractmethod
    def register(
        self,
        token: str,
        user_id: int,
        ip_address: str,
        device_id: str,
        expires_at: datetime,
    ) -> SessionRecord: ...

    @abc.abstractmethod
    def lookup(self, token: str) -> Optional[SessionRecord]:
        """Return the live record for token, deleting it if it has expired."""

    @abc.abstractmethod
    def revoke(self, token: str) -> bool:
        """Delete the record for token; True when something was deleted."""

    @abc.abstractmethod
    def revoke_all_for_user(self, user_id: int) -> int: ...

    @abc.abstractmethod
    def purge_expired(self) -> int:
        """Delete every record whose expiry is strictly in the past."""

    @abc.abstractmethod
    def __len__(self) -> int: ...


class MemorySessionStore(SessionStore):
    """Dict-backed store; every operation runs under one lock."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._records: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()
        self._clock = clock or utcnow

    def register(self, token, user_id, ip_address, device_id, expires_at):
        record = SessionRecord(
            token=token,
            user_id=user_id,
            ip_address=ip_address,
            device_id=device_id,
            expires_at=expires_at,
        )
        with self._lock:
            self._records[token] = record
        return record

    def lookup(self, token):
        now = self._clock()
        with self._lock:
            record = self._records.get(token)
            if record is None:
                return None
            if record.is_expired(now):
                del self._records[token]
                return None
            return record

    def revoke(self, token):
        with self._lock:
            return self._records.pop(token, None) is not None

    def revoke_all_for_user(self, user_id):
        with self._lock:
            doomed = [t for t, r in self._records.items() if r.user_id == user_id]
            for token in doomed:
                del self._records[token]
        return len(doomed)

    def purge_expired(self):
        now = self._clock()
        with self._lock:
            doomed = [t for t, r in self._records.items() if r.expires_at < now]
            for token in doomed:
                del self._records[token]
        return len(doomed)

    def __len__(self):
        with self._lock:
            return len(self._records)
