"""
RefreshToken model: one row per outstanding login session.
Fields:
- user_id (String(36)) - FK to users.id, cascades with the user
- token (Text) - the signed refresh JWT currently valid for this session
- expires_at - server-side expiry, checked independently of the JWT's own exp
- created_at, updated_at
Rotation overwrites token/expires_at in place; logout deletes the row.
"""
from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, as_utc, _utcnow


class RefreshToken(BaseModel, Base):
    __tablename__ = "user_tokens"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    token = Column(Text, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="refresh_tokens")

    __table_args__ = (
        Index("ix_user_tokens_user_id", "user_id"),
        Index("ix_user_tokens_token", "token"),
        Index("ix_user_tokens_expires_at", "expires_at"),
    )

    def is_expired(self, now: datetime | None = None) -> bool:
        return as_utc(self.expires_at) <= (now or _utcnow())

    def __repr__(self):
        return f"<RefreshToken id={self.id} user_id={self.user_id} expires_at={self.expires_at}>"
