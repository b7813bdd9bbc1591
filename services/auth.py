"""
Auth service: registration, login, refresh rotation and logout.

Session token states:
- absent/revoked: no row holds the token
- active: a row holds it and its expires_at is in the future
- expired: a row holds it but expires_at has passed
Refresh only succeeds from the active state and always rotates the row to a new token.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from models.db_storage import DBStorage
from models.user import User
from services.sessions import SessionStore
from utils.errors import AppError, ErrorKind
from utils.security import TokenCodec, TokenIdentity, TokenPair, hash_password, utcnow, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class LoginResult:
    tokens: TokenPair
    user: User


class AuthService:
    def __init__(self, storage: DBStorage, codec: TokenCodec, sessions: SessionStore):
        self._storage = storage
        self._codec = codec
        self._sessions = sessions

    def _find_user_by_email(self, email: str) -> Optional[User]:
        session = self._storage.get_session()
        return session.query(User).filter(User.email == email).first()

    def register(self, full_name: str, email: str, password: str, phone: Optional[str] = None) -> User:
        if self._find_user_by_email(email):
            raise AppError(ErrorKind.CONFLICT, "Email already registered")

        user = User(
            full_name=full_name,
            email=email,
            password_hash=hash_password(password),
            phone=phone,
        )
        self._storage.new(user)
        self._storage.save()
        logger.info("User registered: %s", user.email)
        return user

    def login(self, email: str, password: str) -> LoginResult:
        user = self._find_user_by_email(email)
        # Same error for unknown email and wrong password
        if not user or not verify_password(password, user.password_hash):
            raise AppError(ErrorKind.UNAUTHORIZED, INVALID_CREDENTIALS)

        now = utcnow()
        tokens = self._codec.issue(TokenIdentity(user_id=user.id, email=user.email), now=now)
        self._sessions.record_session(user.id, tokens.refresh_token, self._sessions.new_expiry(now))
        logger.info("User logged in: %s", user.email)
        return LoginResult(tokens=tokens, user=user)

    def refresh(self, refresh_token: str) -> TokenPair:
        identity = self._codec.verify_refresh(refresh_token)

        stored = self._sessions.find_by_token(refresh_token)
        if stored is None:
            raise AppError(ErrorKind.UNAUTHORIZED, "Invalid refresh token")

        now = utcnow()
        if stored.is_expired(now):
            raise AppError(ErrorKind.FORBIDDEN, "Refresh token expired")

        tokens = self._codec.issue(
            TokenIdentity(user_id=identity.user_id, email=identity.email, role=identity.role),
            now=now,
        )
        if not self._sessions.rotate(stored.id, tokens.refresh_token, self._sessions.new_expiry(now)):
            # Row vanished between lookup and update (concurrent logout)
            raise AppError(ErrorKind.UNAUTHORIZED, "Invalid refresh token")
        logger.info("Refresh token rotated for user %s", identity.user_id)
        return tokens

    def logout(self, refresh_token: str) -> None:
        if self._sessions.revoke(refresh_token) == 0:
            logger.warning("Logout attempted with invalid or already used token")
            raise AppError(ErrorKind.UNAUTHORIZED, "Token already invalid or expired")
        logger.info("User logged out")

    def authenticate(self, access_token: str) -> TokenIdentity:
        return self._codec.verify_access(access_token)

    def get_profile(self, user_id: str) -> User:
        user = self._storage.get(User, user_id)
        if not user:
            raise AppError(ErrorKind.NOT_FOUND, "User not found")
        return user
