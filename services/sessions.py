"""
Session store: the server-side record of which refresh tokens are live.

A refresh token is honoured only if its signature verifies AND a row holding it
exists with an unexpired expires_at; logout and rotation act on these rows.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from api.config import TokenSettings
from models.db_storage import DBStorage
from models.refresh_token import RefreshToken
from utils.security import utcnow

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, storage: DBStorage, settings: TokenSettings):
        self._storage = storage
        self._settings = settings

    def new_expiry(self, now: Optional[datetime] = None) -> datetime:
        return (now or utcnow()) + self._settings.refresh_ttl

    def record_session(self, user_id: str, token: str, expires_at: datetime) -> RefreshToken:
        row = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
        self._storage.new(row)
        self._storage.save()
        return row

    def find_by_token(self, token: str) -> Optional[RefreshToken]:
        session = self._storage.get_session()
        return session.query(RefreshToken).filter(RefreshToken.token == token).first()

    def rotate(self, session_id: str, new_token: str, new_expires_at: datetime) -> int:
        """Overwrite the token of one session row; returns the number of rows updated."""
        session = self._storage.get_session()
        updated = (
            session.query(RefreshToken)
            .filter(RefreshToken.id == session_id)
            .update(
                {
                    RefreshToken.token: new_token,
                    RefreshToken.expires_at: new_expires_at,
                    RefreshToken.updated_at: utcnow(),
                },
                synchronize_session="fetch",
            )
        )
        self._storage.save()
        return updated

    def revoke(self, token: str) -> int:
        """Delete the session holding `token`; returns the number of rows removed."""
        session = self._storage.get_session()
        removed = (
            session.query(RefreshToken)
            .filter(RefreshToken.token == token)
            .delete(synchronize_session="fetch")
        )
        self._storage.save()
        return removed
