"""
Manage-Screen: Liste nach Datum, beliebiger Statuswechsel mit Notiz.
Verschickt die allgemeine Status-Email.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from finedine.schemas.reservation import ReservationResponse, StatusUpdate, TransitionResponse
from finedine.services.notification_service import NotificationSender, get_notification_sender
from finedine.services.reservation_store import ReservationStore, StoreError, ReservationNotFoundError, get_reservation_store
from finedine.services.reservation_workflow import ReservationWorkflow, InvalidStatusError, UPDATE_ERROR_MESSAGE
from finedine.utils.http_errors import to_http_exception

router = APIRouter(prefix="/manage/reservations", tags=["manage"])


@router.get("/", response_model=list[ReservationResponse])
def get_reservations(
    store: ReservationStore = Depends(get_reservation_store),
    sender: NotificationSender = Depends(get_notification_sender)
):
    workflow = ReservationWorkflow(store, sender)
    if not workflow.refresh():
        raise HTTPException(status_code=503, detail=workflow.load_error)
    return workflow.reservations


@router.patch("/{id}/status", response_model=TransitionResponse)
async def update_reservation_status(
    id: UUID,
    update: StatusUpdate,
    store: ReservationStore = Depends(get_reservation_store),
    sender: NotificationSender = Depends(get_notification_sender)
):
    workflow = ReservationWorkflow(store, sender)
    try:
        workflow.begin_transition(id, update.status, note=update.note)
        return await workflow.commit_transition()
    except (StoreError, ReservationNotFoundError, InvalidStatusError) as e:
        raise to_http_exception(e, UPDATE_ERROR_MESSAGE)
