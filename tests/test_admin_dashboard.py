"""
Tests für das Admin-Dashboard.

Testet:
- GET /admin/reservations/
- POST /admin/reservations/{id}/confirm
- POST /admin/reservations/{id}/cancel
- PATCH /admin/reservations/{id}/notes
"""
from uuid import uuid4

from finedine.models import Reservation, ReservationStatus
from tests.helpers import FailingStore, make_reservation


def reload(db, reservation_id) -> Reservation:
    db.expire_all()
    return db.query(Reservation).filter(Reservation.id == reservation_id).one()


class TestGetReservations:
    """Tests für GET /admin/reservations/"""

    def test_sorted_by_date_and_time(self, client, reservations):
        response = client.get("/admin/reservations/")

        assert response.status_code == 200
        names = [r["customer_name"] for r in response.json()]
        assert names == ["Early", "Early Evening", "Late"]


class TestConfirmReservation:
    """Tests für POST /admin/reservations/{id}/confirm"""

    def test_confirm_sends_acceptance(self, client, db, sender, pending_reservation):
        response = client.post(f"/admin/reservations/{pending_reservation.id}/confirm")

        assert response.status_code == 200
        assert response.json()["message"] == "Reservation confirmed successfully"
        assert reload(db, pending_reservation.id).status == ReservationStatus.CONFIRMED

        template_id, variables = sender.calls[0]
        assert template_id == "reservation_accepted"
        assert variables["to_name"] == "Grace Hopper"
        assert variables["to_email"] == "grace@example.com"
        assert variables["party_size"] == "4"
        assert variables["reservation_time"] == "18:30"

    def test_confirm_without_note_keeps_notes(self, client, db):
        reservation = make_reservation(db, notes="Birthday dinner")

        response = client.post(f"/admin/reservations/{reservation.id}/confirm")

        assert response.status_code == 200
        assert reload(db, reservation.id).notes == "Birthday dinner"

    def test_confirm_with_empty_note_keeps_notes(self, client, db, sender):
        """Leeres Notizfeld überschreibt die gespeicherte Notiz nicht"""
        reservation = make_reservation(db, notes="Birthday dinner")

        response = client.post(f"/admin/reservations/{reservation.id}/confirm", json={"note": ""})

        assert response.status_code == 200
        assert response.json()["reservation"]["notes"] == "Birthday dinner"
        assert reload(db, reservation.id).notes == "Birthday dinner"
        assert sender.calls[0][1]["notes"] == "Birthday dinner"

    def test_cancel_with_empty_note_keeps_notes(self, client, db):
        reservation = make_reservation(db, notes="Birthday dinner")

        response = client.post(f"/admin/reservations/{reservation.id}/cancel", json={"note": ""})

        assert response.status_code == 200
        assert reload(db, reservation.id).notes == "Birthday dinner"

    def test_confirm_with_note(self, client, db, sender, pending_reservation):
        response = client.post(
            f"/admin/reservations/{pending_reservation.id}/confirm",
            json={"note": "Terrace table"}
        )

        assert response.status_code == 200
        assert reload(db, pending_reservation.id).notes == "Terrace table"
        assert sender.calls[0][1]["notes"] == "Terrace table"

    def test_confirm_cancelled_reservation(self, client, db):
        """Keine Statusregeln: auch eine abgesagte Reservierung kann bestätigt werden"""
        reservation = make_reservation(db, status=ReservationStatus.CANCELLED)

        response = client.post(f"/admin/reservations/{reservation.id}/confirm")

        assert response.status_code == 200
        assert reload(db, reservation.id).status == ReservationStatus.CONFIRMED

    def test_confirm_not_found(self, client):
        response = client.post(f"/admin/reservations/{uuid4()}/confirm")
        assert response.status_code == 404

    def test_confirm_permission_denied(self, client, db, sender, pending_reservation, use_store):
        use_store(FailingStore, code="42501")

        response = client.post(f"/admin/reservations/{pending_reservation.id}/confirm")

        assert response.status_code == 403
        assert sender.calls == []
        assert reload(db, pending_reservation.id).status == ReservationStatus.PENDING


class TestCancelReservation:
    """Tests für POST /admin/reservations/{id}/cancel"""

    def test_cancel_sends_rejection(self, client, db, sender, pending_reservation):
        response = client.post(
            f"/admin/reservations/{pending_reservation.id}/cancel",
            json={"note": "Fully booked that evening"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Reservation cancelled successfully"
        assert reload(db, pending_reservation.id).status == ReservationStatus.CANCELLED

        template_id, variables = sender.calls[0]
        assert template_id == "reservation_rejected"
        assert variables["notes"] == "Fully booked that evening"
        assert variables["reservation_status"] == "Cancelled"

    def test_cancel_email_failure(self, client, db, sender, pending_reservation):
        sender.status_code = 503

        response = client.post(f"/admin/reservations/{pending_reservation.id}/cancel")

        assert response.status_code == 200
        assert response.json()["notification"]["sent"] is False
        assert len(response.json()["warnings"]) == 1
        assert reload(db, pending_reservation.id).status == ReservationStatus.CANCELLED


class TestUpdateNotes:
    """Tests für PATCH /admin/reservations/{id}/notes"""

    def test_update_notes_confirmed(self, client, db, sender):
        reservation = make_reservation(db, status=ReservationStatus.CONFIRMED, notes="old")

        response = client.patch(
            f"/admin/reservations/{reservation.id}/notes",
            json={"notes": "Allergic to nuts"}
        )

        assert response.status_code == 200
        stored = reload(db, reservation.id)
        assert stored.status == ReservationStatus.CONFIRMED
        assert stored.notes == "Allergic to nuts"
        assert sender.calls[0][0] == "reservation_accepted"

    def test_update_notes_pending_uses_status_template(self, client, db, sender, pending_reservation):
        response = client.patch(
            f"/admin/reservations/{pending_reservation.id}/notes",
            json={"notes": "Called back, waiting for deposit"}
        )

        assert response.status_code == 200
        assert reload(db, pending_reservation.id).status == ReservationStatus.PENDING
        assert sender.calls[0][0] == "reservation_status"

    def test_update_notes_not_found(self, client):
        response = client.patch(f"/admin/reservations/{uuid4()}/notes", json={"notes": "x"})
        assert response.status_code == 404
