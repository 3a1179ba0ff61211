# send_test_email.py
import uuid

from airmates.core.config import get_settings
from airmates.core.email_client import dispatch_email
from airmates.models.roommate import Roommate
from airmates.repositories.roommate_repo import RoommateRepository
from airmates.services.notification_service import NotificationService


def main():
    print(f"Sending test payment request via {get_settings().EMAIL_TRANSPORT}...")

    sample = Roommate(
        user_id=uuid.UUID(int=0),
        name="Test Roommate",
        email="YOUR_EMAIL@gmail.com",  # <-- change to the address that should receive it
        balance=-250.0,
    )
    message = NotificationService(RoommateRepository()).build_payment_request(sample)
    dispatch_email(**message)

    print("If no errors: email sent! Check your inbox.")


if __name__ == "__main__":
    main()
