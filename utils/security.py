"""
security helpers:
- Argon2 password hashing via argon2-cffi
- Access/refresh JWT issuance and verification via PyJWT
- JTI generation for token identifiers
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from api.config import TokenSettings
from utils.errors import AppError, ErrorKind

logger = logging.getLogger(__name__)

ph = PasswordHasher()

ACCESS = "access"
REFRESH = "refresh"


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password using argon2
    """
    try:
        return ph.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError):
        logger.error("Stored password hash could not be verified")
        return False


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID).
    """
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenIdentity:
    """Identity claims carried by both token classes."""

    user_id: str
    email: str
    role: Optional[str] = None


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenCodec:
    """
    Signs and verifies access and refresh tokens.
    Each token class has its own secret; a token of one class never verifies as the other.
    """

    def __init__(self, settings: TokenSettings):
        self._settings = settings

    def _secret(self, token_type: str) -> str:
        if token_type == ACCESS:
            return self._settings.access_secret
        return self._settings.refresh_secret

    def _encode(self, identity: TokenIdentity, token_type: str, now: datetime) -> str:
        ttl = self._settings.access_ttl if token_type == ACCESS else self._settings.refresh_ttl
        payload: Dict[str, Any] = {
            "iss": self._settings.issuer,
            "sub": str(identity.user_id),
            "email": identity.email,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "type": token_type,
            "jti": generate_jti(),
        }
        if identity.role:
            payload["role"] = identity.role
        return jwt.encode(payload, self._secret(token_type), algorithm=self._settings.algorithm)

    def issue(self, identity: TokenIdentity, now: Optional[datetime] = None) -> TokenPair:
        now = now or utcnow()
        return TokenPair(
            access_token=self._encode(identity, ACCESS, now),
            refresh_token=self._encode(identity, REFRESH, now),
        )

    def _decode(self, token: str, expected_type: str) -> TokenIdentity:
        """
        Decode and validate a JWT. Raises AppError(UNAUTHORIZED) on invalid signature,
        expiry, missing claims or a token of the other class.
        """
        label = "access" if expected_type == ACCESS else "refresh"
        try:
            decoded = jwt.decode(
                token,
                self._secret(expected_type),
                algorithms=[self._settings.algorithm],
                issuer=self._settings.issuer,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired %s token", label)
            raise AppError(ErrorKind.UNAUTHORIZED, f"Invalid or expired {label} token")
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected %s token: %s", label, exc)
            raise AppError(ErrorKind.UNAUTHORIZED, f"Invalid or expired {label} token")

        if decoded.get("type") != expected_type:
            raise AppError(ErrorKind.UNAUTHORIZED, f"Invalid or expired {label} token")
        return TokenIdentity(
            user_id=decoded["sub"],
            email=decoded.get("email", ""),
            role=decoded.get("role"),
        )

    def verify_access(self, token: str) -> TokenIdentity:
        return self._decode(token, ACCESS)

    def verify_refresh(self, token: str) -> TokenIdentity:
        return self._decode(token, REFRESH)
