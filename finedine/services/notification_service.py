"""
Email-Benachrichtigungen an Gäste.

Ein Sender bekommt eine Template-ID und die Template-Variablen und gibt
eine Empfangsbestätigung (status_code) zurück oder wirft eine Exception.
Zwei Backends:
- SMTP über fastapi-mail, Templates liegen als Jinja-Dateien im Paket
- EmailJS REST-API, Templates werden im EmailJS-Dashboard gepflegt
"""
import logging
from datetime import date
from functools import lru_cache
from typing import Optional

import requests
from fastapi.concurrency import run_in_threadpool
from fastapi_mail import FastMail, MessageSchema, MessageType, ConnectionConfig
from pydantic import BaseModel

from finedine.config import settings
from finedine.models.reservation import ReservationStatus
from finedine.schemas.reservation import NotificationResult

logger = logging.getLogger("finedine.services.notification_service")

NO_NOTES_TEXT = "No additional notes provided."
INVALID_RECIPIENT = "Invalid recipient email address"
NOTIFICATION_WARNING = "Could not send notification email to customer"


class SendReceipt(BaseModel):
    status_code: int
    text: str = ""


# ============ SENDER ============

class NotificationSender:
    """Basisklasse für Template-Mailer."""

    async def send(self, template_id: str, variables: dict[str, str]) -> SendReceipt:
        raise NotImplementedError


class SmtpTemplateSender(NotificationSender):
    """Rendert `<template_id>.html` aus dem Template-Ordner und verschickt per SMTP."""

    def __init__(self, conf: ConnectionConfig, subjects: Optional[dict[str, str]] = None):
        self.mail = FastMail(conf)
        self.subjects = subjects or {}

    async def send(self, template_id: str, variables: dict[str, str]) -> SendReceipt:
        message = MessageSchema(
            subject=self.subjects.get(template_id, settings.mail_from_name),
            recipients=[variables["to_email"]],
            template_body=variables,
            subtype=MessageType.html
        )
        await self.mail.send_message(message, template_name=f"{template_id}.html")
        return SendReceipt(status_code=200, text="OK")


class EmailJSSender(NotificationSender):
    """Verschickt über die EmailJS REST-API. Kein Retry."""

    def __init__(
        self,
        service_id: str,
        public_key: str,
        private_key: str = "",
        url: str = settings.emailjs_url,
        timeout: int = settings.emailjs_timeout_seconds
    ):
        self.service_id = service_id
        self.public_key = public_key
        self.private_key = private_key
        self.url = url
        self.timeout = timeout

    def _post(self, payload: dict) -> requests.Response:
        return requests.post(
            url=self.url,
            json=payload,
            headers={"content-type": "application/json"},
            timeout=self.timeout
        )

    async def send(self, template_id: str, variables: dict[str, str]) -> SendReceipt:
        payload = {
            "service_id": self.service_id,
            "template_id": template_id,
            "user_id": self.public_key,
            "template_params": variables,
        }
        if self.private_key:
            payload["accessToken"] = self.private_key

        response = await run_in_threadpool(self._post, payload)
        return SendReceipt(status_code=response.status_code, text=response.text)


def build_notification_sender(config=settings) -> NotificationSender:
    if config.mail_backend == "emailjs":
        return EmailJSSender(
            service_id=config.emailjs_service_id,
            public_key=config.emailjs_public_key,
            private_key=config.emailjs_private_key,
            url=config.emailjs_url,
            timeout=config.emailjs_timeout_seconds
        )

    conf = ConnectionConfig(
        MAIL_USERNAME=config.smtp_user,
        MAIL_PASSWORD=config.smtp_password,
        MAIL_FROM=config.smtp_from,
        MAIL_FROM_NAME=config.mail_from_name,
        MAIL_PORT=config.smtp_port,
        MAIL_SERVER=config.smtp_host,
        MAIL_STARTTLS=True,
        MAIL_SSL_TLS=False,
        USE_CREDENTIALS=bool(config.smtp_user),
        VALIDATE_CERTS=True,
        TEMPLATE_FOLDER=config.mail_template_folder
    )
    subjects = {
        config.template_status: f"Your reservation at {config.mail_from_name}",
        config.template_accept: f"Your reservation at {config.mail_from_name} is confirmed",
        config.template_reject: f"Your reservation at {config.mail_from_name}",
        config.template_contact: "New message from the contact form",
    }
    return SmtpTemplateSender(conf, subjects)


@lru_cache
def get_notification_sender() -> NotificationSender:
    """FastAPI-Dependency. In Tests per dependency_overrides ersetzen."""
    return build_notification_sender(settings)


# ============ HILFSFUNKTIONEN ============

def format_date(d: date) -> str:
    """z.B. "March 5, 2026" """
    return f"{d:%B} {d.day}, {d.year}"


def build_variables(reservation, status: ReservationStatus, note: Optional[str], include_details: bool) -> dict[str, str]:
    variables = {
        "to_email": reservation.customer_email.strip(),
        "from_name": settings.mail_from_name,
        "reservation_status": status.label,
        "notes": note or NO_NOTES_TEXT,
    }
    if include_details:
        variables.update({
            "to_name": reservation.customer_name,
            "reservation_date": format_date(reservation.reservation_date),
            "reservation_time": reservation.reservation_time,
            "party_size": str(reservation.party_size),
        })
    return variables


# ============ VERSAND ============

async def notify_customer(
    sender: NotificationSender,
    reservation,
    status: ReservationStatus,
    note: Optional[str],
    template_id: str,
    include_details: bool = False
) -> NotificationResult:
    """
    Best-effort Benachrichtigung zu einer Reservierung.

    Wirft nie: Fehler werden geloggt und als NotificationResult zurückgegeben.
    Ohne '@' in der Empfängeradresse wird der Sender gar nicht aufgerufen.
    """
    recipient = (reservation.customer_email or "").strip()
    if "@" not in recipient:
        logger.warning(f"Keine Benachrichtigung für Reservierung {reservation.id}: ungültige Adresse '{recipient}'")
        return NotificationResult(sent=False, skipped=True, template_id=template_id, error=INVALID_RECIPIENT)

    variables = build_variables(reservation, status, note, include_details)
    logger.debug(f"Sende '{template_id}' an {recipient}: {variables}")

    try:
        receipt = await sender.send(template_id, variables)
    except Exception as e:
        logger.error(f"EMAIL FEHLER ({template_id} an {recipient}): {e}")
        return NotificationResult(sent=False, template_id=template_id, error=str(e))

    if not 200 <= receipt.status_code < 300:
        logger.error(f"EMAIL FEHLER ({template_id} an {recipient}): Status {receipt.status_code} {receipt.text}")
        return NotificationResult(
            sent=False,
            template_id=template_id,
            status_code=receipt.status_code,
            error=f"Email failed with status: {receipt.status_code}"
        )

    logger.info(f"Email '{template_id}' an {recipient} verschickt")
    return NotificationResult(sent=True, template_id=template_id, status_code=receipt.status_code)
