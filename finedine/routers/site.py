import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from finedine.config import settings
from finedine.schemas.site import HomeResponse, ContactInfoResponse, ContactMessage
from finedine.services.notification_service import NotificationSender, get_notification_sender
from finedine.utils.rate_limit import limiter

logger = logging.getLogger("finedine.routers.site")

router = APIRouter(tags=["site"])


@router.get("/", response_model=HomeResponse)
def home():
    return HomeResponse(
        app=settings.app_name,
        headline="Experience Fine Dining",
        tagline=(
            "Indulge in an unforgettable culinary journey with our award-winning chefs. "
            "Savor exquisite flavors in an elegant atmosphere."
        ),
        highlights=[
            "Our menu features carefully crafted dishes using the finest ingredients, prepared by our talented culinary team.",
            "Dine in sophisticated surroundings designed to enhance your culinary experience.",
            "Our attentive staff ensures every detail of your dining experience is perfect.",
        ]
    )


@router.get("/contact", response_model=ContactInfoResponse)
def contact_info():
    return ContactInfoResponse(
        name=settings.app_name,
        address=settings.restaurant_address,
        city=settings.restaurant_city,
        phone=settings.restaurant_phone,
        email=settings.restaurant_email,
        opening_hours=settings.opening_hours
    )


@router.post("/contact")
@limiter.limit(settings.rate_limit_public_forms)
async def send_contact_message(
    request: Request,
    contact: ContactMessage,
    sender: NotificationSender = Depends(get_notification_sender)
):
    """Leitet das Kontaktformular per Email an das Restaurant weiter."""
    variables = {
        "to_email": settings.restaurant_email,
        "from_name": contact.name,
        "reply_to": contact.email,
        "subject": contact.subject,
        "message": contact.message,
    }
    try:
        receipt = await sender.send(settings.template_contact, variables)
    except Exception as e:
        logger.error(f"Kontaktformular konnte nicht verschickt werden: {e}")
        raise HTTPException(status_code=502, detail="Could not send your message. Please try again later.")

    if not 200 <= receipt.status_code < 300:
        logger.error(f"Kontaktformular: Mailversand mit Status {receipt.status_code}")
        raise HTTPException(status_code=502, detail="Could not send your message. Please try again later.")

    return {"message": "Thank you for your message. We'll get back to you soon."}
