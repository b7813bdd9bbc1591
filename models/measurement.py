from sqlalchemy import Column, String, Text, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Measurement(BaseModel, Base):
    __tablename__ = "measurements"

    customer_id = Column(String(36), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(50), nullable=False)  # e.g. shirt, pant, blouse
    data = Column(JSON, nullable=False)  # free-form key/value measurements
    notes = Column(Text, nullable=True)

    customer = relationship("Customer", back_populates="measurements")

    __table_args__ = (
        Index("ix_measurements_customer_id", "customer_id"),
        Index("ix_measurements_type", "type"),
    )
