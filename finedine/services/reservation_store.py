"""
Zugriff auf die Tabelle `reservations`.

Kapselt select / insert / update und übersetzt Datenbankfehler in
StoreError mit dem SQLSTATE-Code des Treibers (z.B. 42501, 22007).
"""
import logging
from typing import Iterable, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finedine.database import get_db
from finedine.models.reservation import Reservation

logger = logging.getLogger("finedine.services.reservation_store")

# SQLSTATE: insufficient_privilege
PERMISSION_DENIED = "42501"
# SQLSTATE: invalid_datetime_format
INVALID_DATETIME_FORMAT = "22007"


class StoreError(Exception):
    """Fehler der Datenbank beim Lesen oder Schreiben."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ReservationNotFoundError(Exception):
    def __init__(self, reservation_id: UUID):
        super().__init__(f"Reservation {reservation_id} not found")
        self.reservation_id = reservation_id


def _to_store_error(error: SQLAlchemyError) -> StoreError:
    orig = getattr(error, "orig", None)
    code = getattr(orig, "pgcode", None)
    message = str(orig) if orig is not None else str(error)
    return StoreError(message.strip(), code=code)


def store_error_status(error: StoreError) -> int:
    """HTTP-Status für einen StoreError."""
    if error.code == PERMISSION_DENIED:
        return 403
    if error.code and error.code[:2] in ("22", "23"):
        return 400
    return 500


class ReservationStore:

    def __init__(self, db: Session):
        self.db = db

    def select(self, order_by: Iterable[str] = ("reservation_date",)) -> list[Reservation]:
        columns = [getattr(Reservation, name).asc() for name in order_by]
        try:
            return self.db.query(Reservation).order_by(*columns).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Select auf reservations fehlgeschlagen: {e}")
            raise _to_store_error(e) from e

    def get(self, reservation_id: UUID) -> Reservation:
        try:
            reservation = self.db.query(Reservation).filter(Reservation.id == reservation_id).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Select auf reservations fehlgeschlagen: {e}")
            raise _to_store_error(e) from e
        if not reservation:
            raise ReservationNotFoundError(reservation_id)
        return reservation

    def insert(self, values: dict) -> Reservation:
        reservation = Reservation(**values)
        try:
            self.db.add(reservation)
            self.db.commit()
            self.db.refresh(reservation)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Insert in reservations fehlgeschlagen: {e}")
            raise _to_store_error(e) from e
        return reservation

    def update(self, reservation_id: UUID, patch: dict) -> Reservation:
        reservation = self.get(reservation_id)
        try:
            for field, value in patch.items():
                setattr(reservation, field, value)
            self.db.commit()
            self.db.refresh(reservation)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Update von Reservierung {reservation_id} fehlgeschlagen: {e}")
            raise _to_store_error(e) from e
        return reservation


def get_reservation_store(db: Session = Depends(get_db)) -> ReservationStore:
    return ReservationStore(db)
