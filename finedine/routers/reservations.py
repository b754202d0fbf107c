import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from finedine.schemas.reservation import ReservationCreate, ReservationCreatedResponse, ReservationOptionsResponse
from finedine.services import reservation_service
from finedine.services.notification_service import NotificationSender, get_notification_sender
from finedine.services.reservation_store import ReservationStore, StoreError, get_reservation_store, store_error_status
from finedine.utils.booking import AVAILABLE_TIMES, PARTY_SIZES, booking_window
from finedine.utils.rate_limit import limiter
from finedine.config import settings

logger = logging.getLogger("finedine.routers.reservations")

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("/options", response_model=ReservationOptionsResponse)
def get_reservation_options():
    earliest, latest = booking_window()
    return ReservationOptionsResponse(
        times=list(AVAILABLE_TIMES),
        party_sizes=list(PARTY_SIZES),
        earliest_date=earliest,
        latest_date=latest
    )


@router.post("/", response_model=ReservationCreatedResponse, status_code=201)
@limiter.limit(settings.rate_limit_public_forms)
async def create_reservation(
    request: Request,
    data: ReservationCreate,
    store: ReservationStore = Depends(get_reservation_store),
    sender: NotificationSender = Depends(get_notification_sender)
):
    try:
        return await reservation_service.create_reservation(store, sender, data)
    except StoreError as e:
        logger.error(f"Reservierung konnte nicht angelegt werden (Code {e.code}): {e.message}")
        raise HTTPException(
            status_code=store_error_status(e),
            detail=reservation_service.humanize_intake_error(e)
        )
