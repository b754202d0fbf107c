"""
Statuswechsel von Reservierungen im Admin-Bereich.

Ein Workflow hält die geladene Reservierungsliste und den offenen
Bearbeitungsvorgang (PendingEdit). Ablauf beim Speichern:

    persistieren → lokale Liste patchen → Gast benachrichtigen → neu laden

Statuswechsel sind nicht eingeschränkt: jeder Status darf aus jedem
anderen gesetzt werden. Benachrichtigungen sind best-effort und machen
einen gespeicherten Statuswechsel nie rückgängig.
"""
import enum
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional
from uuid import UUID

from pydantic import BaseModel

from finedine.config import settings
from finedine.models.reservation import ReservationStatus
from finedine.schemas.reservation import ReservationResponse, NotificationResult, TransitionResponse
from finedine.services.notification_service import NotificationSender, notify_customer, NOTIFICATION_WARNING
from finedine.services.reservation_store import ReservationStore, StoreError

logger = logging.getLogger("finedine.services.reservation_workflow")

LOAD_ERROR_MESSAGE = "Failed to load reservations"
UPDATE_ERROR_MESSAGE = "Failed to update reservation status"


class InvalidStatusError(ValueError):
    pass


class NoPendingEditError(Exception):
    pass


class NotificationStyle(enum.Enum):
    # Ein Template für alle Status (Manage-Screen)
    STATUS = "status"
    # Bestätigungs-/Absage-Template mit Reservierungsdetails (Dashboard)
    DECISION = "decision"


class PendingEdit(BaseModel):
    reservation: ReservationResponse
    status: ReservationStatus | str
    # None = gespeicherte Notiz behalten
    note: Optional[str] = ""


def coerce_status(value) -> ReservationStatus:
    if isinstance(value, ReservationStatus):
        return value
    try:
        return ReservationStatus(value)
    except ValueError:
        raise InvalidStatusError(f"Invalid status: {value}")


class ReservationWorkflow:

    def __init__(
        self,
        store: ReservationStore,
        sender: NotificationSender,
        order_by: Iterable[str] = ("reservation_date",),
        style: NotificationStyle = NotificationStyle.STATUS
    ):
        self.store = store
        self.sender = sender
        self.order_by = tuple(order_by)
        self.style = style
        self.reservations: list[ReservationResponse] = []
        self.pending: Optional[PendingEdit] = None
        self.load_error: Optional[str] = None

    # ============ LISTE ============

    def refresh(self) -> bool:
        """
        Lädt alle Reservierungen neu.
        Bei Fehler bleibt die bisherige Liste stehen (initial leer) und
        load_error ist gesetzt.
        """
        try:
            rows = self.store.select(order_by=self.order_by)
        except StoreError as e:
            logger.error(f"Reservierungen konnten nicht geladen werden: {e}")
            self.load_error = LOAD_ERROR_MESSAGE
            return False

        self.reservations = [ReservationResponse.model_validate(row) for row in rows]
        self.load_error = None
        return True

    def find(self, reservation_id: UUID) -> ReservationResponse:
        for reservation in self.reservations:
            if reservation.id == reservation_id:
                return reservation
        # Nicht in der geladenen Liste → direkt aus der DB
        return ReservationResponse.model_validate(self.store.get(reservation_id))

    def _patch_local(self, updated: ReservationResponse):
        self.reservations = [
            updated if reservation.id == updated.id else reservation
            for reservation in self.reservations
        ]

    # ============ BEARBEITUNGSVORGANG ============

    def begin_transition(self, reservation_id: UUID, status, note: Optional[str] = "") -> PendingEdit:
        """Öffnet einen Bearbeitungsvorgang. Ein offener Vorgang wird überschrieben."""
        reservation = self.find(reservation_id)
        if self.pending is not None:
            logger.debug(f"Offener Vorgang für {self.pending.reservation.id} wird verworfen")
        self.pending = PendingEdit(reservation=reservation, status=status, note=note)
        return self.pending

    def set_note(self, note: Optional[str]) -> PendingEdit:
        if self.pending is None:
            raise NoPendingEditError("No transition in progress")
        self.pending.note = note
        return self.pending

    def cancel_transition(self):
        self.pending = None

    async def commit_transition(self) -> TransitionResponse:
        """
        Speichert den offenen Vorgang.

        StoreError / ReservationNotFoundError / InvalidStatusError werden
        weitergereicht, dann ist weder lokal noch in der DB etwas passiert
        und es wird keine Email verschickt. Der Vorgang ist danach in
        jedem Fall geschlossen.
        """
        if self.pending is None:
            raise NoPendingEditError("No transition in progress")

        try:
            pending = self.pending
            status = coerce_status(pending.status)
            reservation = pending.reservation
            notes = pending.note if pending.note is not None else reservation.notes

            logger.info(f"Reservierung {reservation.id}: {reservation.status.value} → {status.value}")
            updated_row = self.store.update(reservation.id, {
                "status": status,
                "notes": notes,
                "updated_at": datetime.now(timezone.utc),
            })
            updated = ReservationResponse.model_validate(updated_row)
            self._patch_local(updated)

            notification = await self.notify(updated, status, notes)
        finally:
            self.pending = None

        warnings = []
        if not notification.sent:
            warnings.append(NOTIFICATION_WARNING)

        # Abgleich mit der DB
        if self.refresh():
            reconciled = next((r for r in self.reservations if r.id == updated.id), updated)
        else:
            warnings.append(LOAD_ERROR_MESSAGE)
            reconciled = updated

        return TransitionResponse(
            message=f"Reservation {status.value} successfully",
            reservation=reconciled,
            notification=notification,
            warnings=warnings
        )

    async def edit_notes(self, reservation_id: UUID, notes: str) -> TransitionResponse:
        """Nur Notizen ändern, Status bleibt. Gleicher Ablauf wie ein Statuswechsel."""
        reservation = self.find(reservation_id)
        self.pending = PendingEdit(reservation=reservation, status=reservation.status, note=notes)
        result = await self.commit_transition()
        result.message = "Reservation notes updated successfully"
        return result

    # ============ BENACHRICHTIGUNG ============

    def template_for(self, status: ReservationStatus) -> tuple[str, bool]:
        """Template-ID und ob Reservierungsdetails mitgeschickt werden."""
        if self.style == NotificationStyle.DECISION:
            if status == ReservationStatus.CONFIRMED:
                return settings.template_accept, True
            if status == ReservationStatus.CANCELLED:
                return settings.template_reject, True
        return settings.template_status, False

    async def notify(self, reservation: ReservationResponse, status: ReservationStatus, note: Optional[str]) -> NotificationResult:
        template_id, include_details = self.template_for(status)
        return await notify_customer(
            self.sender,
            reservation,
            status,
            note,
            template_id,
            include_details=include_details
        )
