"""
Customer and measurement management, scoped to the owning user.

Every single-record read and every mutation first resolves the owning scope:
a missing record is NOT_FOUND, a record owned by someone else is FORBIDDEN.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, or_

from models.customer import Customer
from models.db_storage import DBStorage
from models.measurement import Measurement
from models.user import User
from utils.errors import AppError, ErrorKind

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = ("full_name", "email", "phone", "gender", "address")


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the search term matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class Page:
    items: List[Customer]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class CustomerService:
    def __init__(self, storage: DBStorage):
        self._storage = storage

    # ownership checks

    def _owner(self, user_id: str) -> User:
        user = self._storage.get(User, user_id)
        if user is None:
            raise AppError(ErrorKind.NOT_FOUND, "User not found")
        return user

    def _owned_customer(self, user_id: str, customer_id: str, action: str) -> Customer:
        customer = self._storage.get(Customer, customer_id)
        if customer is None:
            raise AppError(ErrorKind.NOT_FOUND, "Customer not found")
        if customer.user_id != user_id:
            raise AppError(ErrorKind.FORBIDDEN, f"Not authorized to {action} this customer")
        return customer

    def _owned_measurement(self, user_id: str, measurement_id: str, action: str) -> Measurement:
        measurement = self._storage.get(Measurement, measurement_id)
        if measurement is None:
            raise AppError(ErrorKind.NOT_FOUND, "Measurement not found")
        customer = self._storage.get(Customer, measurement.customer_id)
        if customer is None or customer.user_id != user_id:
            raise AppError(ErrorKind.FORBIDDEN, f"Not authorized to {action} this measurement")
        return measurement

    # customers

    def create_customer(self, user_id: str, data: Dict[str, Any]) -> Customer:
        owner = self._owner(user_id)
        customer = Customer(user_id=owner.id, **{k: data.get(k) for k in CUSTOMER_FIELDS})
        self._storage.new(customer)
        self._storage.save()
        logger.info("Customer created: %s (owner %s)", customer.id, user_id)
        return customer

    def create_customer_with_measurements(
        self, user_id: str, data: Dict[str, Any], measurements: Iterable[Dict[str, Any]]
    ) -> Customer:
        """Create a customer and its measurements in one transaction."""
        owner = self._owner(user_id)
        customer = Customer(user_id=owner.id, **{k: data.get(k) for k in CUSTOMER_FIELDS})
        for item in measurements:
            customer.measurements.append(
                Measurement(type=item["type"], data=item["data"], notes=item.get("notes"))
            )
        self._storage.new(customer)
        self._storage.save()
        logger.info(
            "Customer created with %d measurement(s): %s (owner %s)",
            len(customer.measurements), customer.id, user_id,
        )
        return customer

    def list_customers(self, user_id: str, page: int = 1, limit: int = 10, search: Optional[str] = None) -> Page:
        session = self._storage.get_session()
        query = session.query(Customer).filter(Customer.user_id == user_id)
        if search and search.strip():
            qnorm = f"%{escape_like(search.strip().lower())}%"
            query = query.filter(
                or_(
                    func.lower(Customer.full_name).like(qnorm, escape="\\"),
                    func.lower(Customer.phone).like(qnorm, escape="\\"),
                )
            )

        total = query.count()
        rows = (
            query.order_by(Customer.created_at.desc(), Customer.id)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return Page(items=rows, page=page, limit=limit, total=total)

    def get_customer(self, user_id: str, customer_id: str) -> Customer:
        """The customer with its measurements loaded through the relationship."""
        return self._owned_customer(user_id, customer_id, "view")

    def update_customer(self, user_id: str, customer_id: str, changes: Dict[str, Any]) -> Customer:
        customer = self._owned_customer(user_id, customer_id, "update")
        for key in CUSTOMER_FIELDS:
            if key in changes:
                setattr(customer, key, changes[key])
        self._storage.new(customer)
        self._storage.save()
        logger.info("Customer updated: %s", customer.id)
        return customer

    def delete_customer(self, user_id: str, customer_id: str) -> None:
        customer = self._owned_customer(user_id, customer_id, "delete")
        self._storage.delete(customer)
        self._storage.save()
        logger.info("Customer deleted: %s", customer_id)

    # measurements

    def add_measurement(
        self, user_id: str, customer_id: str, measurement_type: str, data: Dict[str, Any], notes: Optional[str] = None
    ) -> Measurement:
        customer = self._owned_customer(user_id, customer_id, "add measurements for")
        measurement = Measurement(customer_id=customer.id, type=measurement_type, data=data, notes=notes)
        self._storage.new(measurement)
        self._storage.save()
        logger.info("Measurement added for customer %s: %s", customer.id, measurement.id)
        return measurement

    def get_measurement(self, user_id: str, measurement_id: str) -> Measurement:
        return self._owned_measurement(user_id, measurement_id, "view")

    def update_measurement(self, user_id: str, measurement_id: str, changes: Dict[str, Any]) -> Measurement:
        measurement = self._owned_measurement(user_id, measurement_id, "modify")
        if "data" in changes:
            measurement.data = changes["data"]
        if "notes" in changes:
            measurement.notes = changes["notes"]
        self._storage.new(measurement)
        self._storage.save()
        logger.info("Measurement updated: %s", measurement.id)
        return measurement

    def delete_measurement(self, user_id: str, measurement_id: str) -> None:
        measurement = self._owned_measurement(user_id, measurement_id, "delete")
        self._storage.delete(measurement)
        self._storage.save()
        logger.info("Measurement deleted: %s", measurement_id)
