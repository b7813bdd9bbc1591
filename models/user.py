from models.base_model import Base, BaseModel
from sqlalchemy import Column, String, Index
from sqlalchemy.orm import relationship


class User(BaseModel, Base):
    __tablename__ = "users"
    full_name = Column(String(100), nullable=False)
    # Stored trimmed and lower-cased; normalization happens in the schemas
    email = Column(String(120), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)

    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    customers = relationship(
        "Customer",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_users_full_name", "full_name"),
        Index("ix_users_phone", "phone"),
    )

    @property
    def password(self):
        raise AttributeError("Password: Write-only field")
