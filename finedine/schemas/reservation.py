from uuid import UUID
from datetime import date, datetime, timedelta
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from finedine.models.reservation import ReservationStatus
from finedine.utils.booking import AVAILABLE_TIMES, PARTY_SIZES, BOOKING_WINDOW_DAYS, restaurant_today


class ReservationCreate(BaseModel):
    """Eingabe des öffentlichen Reservierungsformulars"""
    name: str = Field(min_length=2, max_length=50)
    email: str
    phone: str = Field(min_length=10, max_length=15)
    party_size: int
    reservation_date: date = Field(alias="date")
    reservation_time: str = Field(alias="time")

    model_config = {"populate_by_name": True}

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        local, at, domain = value.strip().partition("@")
        if not at or not local or not domain:
            raise ValueError("Valid email is required")
        return value.strip()

    @field_validator("party_size", mode="before")
    @classmethod
    def reject_bool_party_size(cls, value):
        # pydantic würde true/false sonst als 1/0 durchlassen
        if isinstance(value, bool):
            raise ValueError("Please select number of guests")
        return value

    @field_validator("party_size")
    @classmethod
    def validate_party_size(cls, value: int) -> int:
        if value not in PARTY_SIZES:
            raise ValueError("Please select number of guests")
        return value

    @field_validator("reservation_date")
    @classmethod
    def validate_date(cls, value: date) -> date:
        today = restaurant_today()
        if value < today or value > today + timedelta(days=BOOKING_WINDOW_DAYS):
            raise ValueError("Please select a date within the next two months")
        return value

    @field_validator("reservation_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        if value not in AVAILABLE_TIMES:
            raise ValueError("Invalid time selected")
        return value


class ReservationResponse(BaseModel):
    id: UUID
    customer_name: str
    customer_email: str
    customer_phone: str
    party_size: int
    reservation_date: date
    reservation_time: str
    status: ReservationStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ReservationOptionsResponse(BaseModel):
    """Auswahlwerte für das Formular"""
    times: list[str]
    party_sizes: list[int]
    earliest_date: date
    latest_date: date


class NotificationResult(BaseModel):
    sent: bool
    skipped: bool = False
    template_id: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None


class ReservationCreatedResponse(BaseModel):
    message: str
    reservation: ReservationResponse
    notification: NotificationResult
    warnings: list[str] = []


# ============ ADMIN ============

class StatusUpdate(BaseModel):
    """Manage-Screen: beliebiger Zielstatus plus Notiz"""
    status: ReservationStatus
    note: str = ""

    @field_validator("status", mode="before")
    @classmethod
    def resolve_alias(cls, value):
        if isinstance(value, str):
            return ReservationStatus(value)
        return value


class DecisionRequest(BaseModel):
    """Dashboard: Bestätigen/Ablehnen. Ohne Notiz bleibt die gespeicherte Notiz erhalten."""
    note: Optional[str] = None


class NotesUpdate(BaseModel):
    notes: str


class TransitionResponse(BaseModel):
    message: str
    reservation: ReservationResponse
    notification: Optional[NotificationResult] = None
    warnings: list[str] = []
