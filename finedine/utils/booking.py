"""
Buchungsregeln für neue Reservierungen.

Gelten nur bei der Anlage einer Reservierung, beim Statuswechsel
wird nichts davon erneut geprüft.
"""
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from finedine.config import settings

# Halbstündliche Slots im Abendservice
AVAILABLE_TIMES = (
    "17:00",
    "17:30",
    "18:00",
    "18:30",
    "19:00",
    "19:30",
    "20:00",
    "20:30",
    "21:00",
    "21:30",
)

PARTY_SIZES = tuple(range(1, 9))

# Buchbar von heute bis heute + 60 Tage
BOOKING_WINDOW_DAYS = 60


def restaurant_today() -> date:
    """Heutiges Datum in der Zeitzone des Restaurants."""
    return datetime.now(ZoneInfo(settings.timezone)).date()


def booking_window() -> tuple[date, date]:
    today = restaurant_today()
    return today, today + timedelta(days=BOOKING_WINDOW_DAYS)
