from fastapi import HTTPException

from finedine.services.reservation_store import StoreError, ReservationNotFoundError, store_error_status
from finedine.services.reservation_workflow import InvalidStatusError, NoPendingEditError


def to_http_exception(error: Exception, fallback_detail: str) -> HTTPException:
    """Übersetzt Fehler aus dem Reservierungs-Workflow in eine HTTPException."""
    if isinstance(error, ReservationNotFoundError):
        return HTTPException(status_code=404, detail="Reservation not found")
    if isinstance(error, InvalidStatusError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, NoPendingEditError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, StoreError):
        return HTTPException(status_code=store_error_status(error), detail=error.message or fallback_detail)
    return HTTPException(status_code=500, detail=fallback_detail)
