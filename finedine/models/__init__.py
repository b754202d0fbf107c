from finedine.models.reservation import Reservation, ReservationStatus
from finedine.models.menu import MenuCategory, MenuItem
