# server/core/state.py

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable

from jose import JWTError, jwt

from core.security import UserIdentity


logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
SESSION_COOKIE = "session_id"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionRecord:
    token: str
    user_id: int
    username: str
    created_at: datetime
    expires_at: datetime

    @property
    def identity(self) -> UserIdentity:
        return UserIdentity(id=self.user_id, username=self.username)


class SessionManager:
    """
    Server-side session store.

    Sessions live in memory and are keyed by a random token. The client only
    ever sees that token wrapped in a signed JWS, so a forged or altered
    cookie fails before the store is consulted. Lifetime is absolute: reads
    never extend ``expires_at``.
    """

    def __init__(
        self,
        secret: str,
        lifetime: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utcnow,
    ):
        self._secret = secret
        self._clock = clock
        self.lifetime = lifetime
        self._sessions: dict[str, SessionRecord] = {}
        self._lock = Lock()

    def create_session(self, identity: UserIdentity) -> str:
        now = self._clock()
        record = SessionRecord(
            token=secrets.token_urlsafe(32),
            user_id=identity.id,
            username=identity.username,
            created_at=now,
            expires_at=now + self.lifetime,
        )
        with self._lock:
            self._sessions[record.token] = record

        return jwt.encode({"sid": record.token}, self._secret, algorithm=ALGORITHM)

    def resolve_session(self, cookie_value: str | None) -> UserIdentity | None:
        if not cookie_value:
            return None

        try:
            payload = jwt.decode(cookie_value, self._secret, algorithms=[ALGORITHM])
        except JWTError:
            logger.warning("Rejected session cookie with a bad signature")
            return None

        token = payload.get("sid")
        if not isinstance(token, str):
            return None

        with self._lock:
            record = self._sessions.get(token)
            if record is None:
                return None
            if self._clock() >= record.expires_at:
                del self._sessions[token]
                return None

        return record.identity

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [token for token, record in self._sessions.items() if now >= record.expires_at]
            for token in expired:
                del self._sessions[token]

        if expired:
            logger.debug("Purged %d expired sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
