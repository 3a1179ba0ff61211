# airmates/services/notification_service.py
import html
import logging
import uuid
from collections.abc import Callable

from fastapi import HTTPException, status
from sqlmodel import Session

from airmates.core.config import get_settings
from airmates.core.email_client import dispatch_email
from airmates.models.profile import Profile
from airmates.models.roommate import Roommate
from airmates.repositories.roommate_repo import RoommateRepository
from airmates.schemas.roommate import PaymentRequestResult

logger = logging.getLogger(__name__)

PAYMENT_REQUEST_HTML = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #2563eb;">Payment Request</h2>
  <p>Hi {name},</p>
  <p>You have a pending payment request on {app_name}.</p>
  <div style="background-color: #f3f4f6; padding: 20px; border-radius: 8px; margin: 20px 0; text-align: center;">
    <h3 style="margin: 0; color: #374151; font-size: 24px;">Amount Due: {amount}</h3>
  </div>
  <p>Please settle this amount at your earliest convenience.</p>
</div>
"""

PAYMENT_REQUEST_TEXT = (
    "Hi {name},\n\n"
    "You have a pending payment request on {app_name}.\n\n"
    "Amount Due: {amount}\n\n"
    "Please settle this amount at your earliest convenience.\n"
)


def format_amount(balance: float, currency_symbol: str) -> str:
    """Absolute amount, without decimals when it is a whole number."""
    amount = abs(balance)
    if amount == int(amount):
        return f"{currency_symbol}{int(amount)}"
    return f"{currency_symbol}{amount:.2f}"


class NotificationService:
    """
    Payment-request emails to roommates.

    Delivery goes through `send` (dispatch_email by default), which picks
    the Supabase edge function or SMTP from settings. There is no retry;
    the user triggers the request again after a failure.
    """

    def __init__(
        self,
        roommate_repo: RoommateRepository,
        send: Callable[..., None] = dispatch_email,
    ):
        self.roommate_repo = roommate_repo
        self.send = send

    def build_payment_request(self, roommate: Roommate) -> dict[str, object]:
        """Return the keyword arguments for `send` (recipients, subject, bodies)."""
        settings = get_settings()
        amount = format_amount(roommate.balance, settings.CURRENCY_SYMBOL)
        return {
            "to_emails": [roommate.email],
            "subject": f"Payment Request from {settings.APP_NAME}",
            "text_body": PAYMENT_REQUEST_TEXT.format(
                name=roommate.name, app_name=settings.APP_NAME, amount=amount
            ),
            "html_body": PAYMENT_REQUEST_HTML.format(
                name=html.escape(roommate.name),
                app_name=html.escape(settings.APP_NAME),
                amount=html.escape(amount),
            ),
            "from_header": settings.EMAIL_FROM,
        }

    def send_payment_request(
        self,
        session: Session,
        current_user: Profile,
        roommate_id: uuid.UUID,
    ) -> PaymentRequestResult:
        roommate = self.roommate_repo.get_for_user(session, current_user.id, roommate_id)
        if not roommate:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Roommate not found",
            )

        try:
            self.send(**self.build_payment_request(roommate))
        except Exception as e:
            logger.error(f"Error sending payment request to {roommate.email}: {e}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Failed to send email to {roommate.name}",
            )

        logger.info(f"Payment request sent to {roommate.email}")
        return PaymentRequestResult(
            message=f"Payment request email sent to {roommate.name}"
        )
