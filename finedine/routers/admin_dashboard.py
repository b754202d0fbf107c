"""
Admin-Dashboard: Liste nach Datum und Uhrzeit, Bestätigen / Ablehnen,
Notizen bearbeiten. Verschickt Bestätigungs- bzw. Absage-Emails.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from finedine.models.reservation import ReservationStatus
from finedine.schemas.reservation import ReservationResponse, DecisionRequest, NotesUpdate, TransitionResponse
from finedine.services.notification_service import NotificationSender, get_notification_sender
from finedine.services.reservation_store import ReservationStore, StoreError, ReservationNotFoundError, get_reservation_store
from finedine.services.reservation_workflow import ReservationWorkflow, NotificationStyle, InvalidStatusError, UPDATE_ERROR_MESSAGE
from finedine.utils.http_errors import to_http_exception

router = APIRouter(prefix="/admin/reservations", tags=["admin"])

DASHBOARD_ORDER = ("reservation_date", "reservation_time")


def _workflow(store: ReservationStore, sender: NotificationSender) -> ReservationWorkflow:
    return ReservationWorkflow(store, sender, order_by=DASHBOARD_ORDER, style=NotificationStyle.DECISION)


async def _decide(
    id: UUID,
    status: ReservationStatus,
    decision: Optional[DecisionRequest],
    store: ReservationStore,
    sender: NotificationSender
) -> TransitionResponse:
    workflow = _workflow(store, sender)
    # Leere Notiz = gespeicherte Notiz behalten
    note = decision.note if decision and decision.note else None
    try:
        workflow.begin_transition(id, status, note=note)
        return await workflow.commit_transition()
    except (StoreError, ReservationNotFoundError, InvalidStatusError) as e:
        raise to_http_exception(e, f"Failed to {status.value} reservation")


@router.get("/", response_model=list[ReservationResponse])
def get_reservations(
    store: ReservationStore = Depends(get_reservation_store),
    sender: NotificationSender = Depends(get_notification_sender)
):
    workflow = _workflow(store, sender)
    if not workflow.refresh():
        raise HTTPException(status_code=503, detail=workflow.load_error)
    return workflow.reservations


@router.post("/{id}/confirm", response_model=TransitionResponse)
async def confirm_reservation(
    id: UUID,
    decision: Optional[DecisionRequest] = None,
    store: ReservationStore = Depends(get_reservation_store),
    sender: NotificationSender = Depends(get_notification_sender)
):
    return await _decide(id, ReservationStatus.CONFIRMED, decision, store, sender)


@router.post("/{id}/cancel", response_model=TransitionResponse)
async def cancel_reservation(
    id: UUID,
    decision: Optional[DecisionRequest] = None,
    store: ReservationStore = Depends(get_reservation_store),
    sender: NotificationSender = Depends(get_notification_sender)
):
    return await _decide(id, ReservationStatus.CANCELLED, decision, store, sender)


@router.patch("/{id}/notes", response_model=TransitionResponse)
async def update_notes(
    id: UUID,
    update: NotesUpdate,
    store: ReservationStore = Depends(get_reservation_store),
    sender: NotificationSender = Depends(get_notification_sender)
):
    workflow = _workflow(store, sender)
    try:
        return await workflow.edit_notes(id, update.notes)
    except (StoreError, ReservationNotFoundError, InvalidStatusError) as e:
        raise to_http_exception(e, UPDATE_ERROR_MESSAGE)
