"""
Test-Helfer: Fake-Mailer, Stores mit eingebauten Fehlern, Testdaten.
"""
from datetime import timedelta
from uuid import uuid4

from finedine.models import Reservation, ReservationStatus
from finedine.services.notification_service import NotificationSender, SendReceipt
from finedine.services.reservation_store import ReservationStore, StoreError
from finedine.utils.booking import restaurant_today


class RecordingSender(NotificationSender):
    """Schreibt alle Aufrufe mit. Optional: Status-Code oder Exception vorgeben."""

    def __init__(self, status_code: int = 200, error: Exception | None = None):
        self.status_code = status_code
        self.error = error
        self.calls = []

    async def send(self, template_id, variables):
        self.calls.append((template_id, dict(variables)))
        if self.error:
            raise self.error
        return SendReceipt(status_code=self.status_code, text="OK")


class FailingStore(ReservationStore):
    """Lesen klappt, Schreiben scheitert mit dem angegebenen Fehlercode."""

    def __init__(self, db, code="42501", message="permission denied for table reservations"):
        super().__init__(db)
        self.code = code
        self.message = message

    def insert(self, values):
        raise StoreError(self.message, code=self.code)

    def update(self, reservation_id, patch):
        raise StoreError(self.message, code=self.code)


class BrokenSelectStore(ReservationStore):
    """Schreiben klappt, Lesen der Liste scheitert."""

    def select(self, order_by=("reservation_date",)):
        raise StoreError("connection reset by peer", code="08006")


def make_reservation(db, **overrides) -> Reservation:
    values = {
        "id": uuid4(),
        "customer_name": "Grace Hopper",
        "customer_email": "grace@example.com",
        "customer_phone": "5559876543",
        "party_size": 4,
        "reservation_date": restaurant_today() + timedelta(days=5),
        "reservation_time": "18:30",
        "status": ReservationStatus.PENDING,
    }
    values.update(overrides)
    reservation = Reservation(**values)
    db.add(reservation)
    db.commit()
    db.refresh(reservation)
    return reservation
