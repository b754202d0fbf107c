import uuid
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Date, Integer, DateTime, Enum, String, Text
from sqlalchemy.dialects.postgresql import UUID

from finedine.database import Base


class ReservationStatus(enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    @classmethod
    def _missing_(cls, value):
        # "accepted"/"rejected" kommen aus dem alten Manage-Screen
        if isinstance(value, str):
            normalized = value.strip().lower()
            normalized = STATUS_ALIASES.get(normalized, normalized)
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def label(self) -> str:
        return self.value.capitalize()


STATUS_ALIASES = {
    "accepted": "confirmed",
    "rejected": "cancelled",
}


class Reservation(Base):
    """
    Tischreservierung eines Gastes.
    Wird über das Reservierungsformular angelegt (Status pending) und
    danach nur noch im Admin-Bereich geändert (Status, Notizen).
    """
    __tablename__ = "reservations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_name = Column(String(50), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(15), nullable=False)
    party_size = Column(Integer, nullable=False)
    reservation_date = Column(Date, nullable=False)
    reservation_time = Column(String(5), nullable=False)
    status = Column(
        Enum(ReservationStatus, name="reservation_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ReservationStatus.PENDING
    )
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=True)
