"""
Anlage neuer Reservierungen über das öffentliche Formular.
"""
import logging
from datetime import datetime, timezone

from finedine.config import settings
from finedine.models.reservation import ReservationStatus
from finedine.schemas.reservation import ReservationCreate, ReservationResponse, ReservationCreatedResponse
from finedine.services.notification_service import NotificationSender, notify_customer, NOTIFICATION_WARNING
from finedine.services.reservation_store import (
    ReservationStore,
    StoreError,
    PERMISSION_DENIED,
    INVALID_DATETIME_FORMAT,
)

logger = logging.getLogger("finedine.services.reservation_service")

RECEIVED_NOTE = "Your reservation has been received and is pending confirmation."
SUCCESS_MESSAGE = "Reservation submitted successfully!"
GENERIC_ERROR_MESSAGE = "Failed to submit reservation. Please try again."

INTAKE_ERROR_MESSAGES = {
    PERMISSION_DENIED: "Unable to create reservation. Please try again later.",
    INVALID_DATETIME_FORMAT: "Please select a valid time for your reservation.",
}


def humanize_intake_error(error: StoreError) -> str:
    """Bekannte Fehlercodes → freundlicher Text, sonst die Originalmeldung."""
    if error.code in INTAKE_ERROR_MESSAGES:
        return INTAKE_ERROR_MESSAGES[error.code]
    return error.message or GENERIC_ERROR_MESSAGE


async def create_reservation(
    store: ReservationStore,
    sender: NotificationSender,
    data: ReservationCreate
) -> ReservationCreatedResponse:
    """
    Legt die Reservierung mit Status pending an und verschickt danach
    die Eingangsbestätigung.

    StoreError wird weitergereicht. Ein Fehler beim Emailversand wird nur
    geloggt, die Reservierung bleibt bestehen.
    """
    row = store.insert({
        "customer_name": data.name,
        "customer_email": data.email,
        "customer_phone": data.phone,
        "party_size": data.party_size,
        "reservation_date": data.reservation_date,
        "reservation_time": data.reservation_time,
        "status": ReservationStatus.PENDING,
        "created_at": datetime.now(timezone.utc),
    })
    reservation = ReservationResponse.model_validate(row)
    logger.info(f"Neue Reservierung {reservation.id}: {reservation.reservation_date} {reservation.reservation_time}, {reservation.party_size} Pers.")

    notification = await notify_customer(
        sender,
        reservation,
        ReservationStatus.PENDING,
        RECEIVED_NOTE,
        settings.template_status,
        include_details=True
    )
    if not notification.sent:
        logger.warning(f"Eingangsbestätigung für {reservation.id} nicht verschickt: {notification.error}")

    return ReservationCreatedResponse(
        message=SUCCESS_MESSAGE,
        reservation=reservation,
        notification=notification,
        warnings=[] if notification.sent else [NOTIFICATION_WARNING]
    )
