from sqlalchemy import Column, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Customer(BaseModel, Base):
    __tablename__ = "customers"

    # Owner; customers are deleted along with their user
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    full_name = Column(String(100), nullable=False)  # not unique per owner; people share names
    email = Column(String(120), nullable=True)
    phone = Column(String(20), nullable=True)
    gender = Column(String(10), nullable=True)
    address = Column(Text, nullable=True)

    owner = relationship("User", back_populates="customers")
    measurements = relationship(
        "Measurement",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Measurement.created_at",
    )

    __table_args__ = (
        Index("ix_customers_user_id", "user_id"),
        Index("ix_customers_full_name", "full_name"),
        Index("ix_customers_phone", "phone"),
    )
