# airmates/core/email_client.py
"""
Email client utilities for AirMates backend.

Responsibilities:
  - Read email configuration from Settings.
  - Provide a single dispatch_email(...) function for services to use.
  - Deliver either through the Supabase `send-email` edge function or
    directly over SMTP (TLS or SSL).

Typical .env configuration for SMTP (Gmail example with App Password):

    EMAIL_TRANSPORT=smtp
    SMTP_HOST=smtp.gmail.com
    SMTP_PORT=465
    SMTP_USERNAME=airmates@gmail.com
    SMTP_PASSWORD=<app password>
    SMTP_USE_TLS=false
    SMTP_USE_SSL=true
"""

from __future__ import annotations

import smtplib
from email.message import EmailMessage

from airmates.core.config import get_settings
from airmates.core.supabase_client import functions_client


def _create_smtp_client() -> smtplib.SMTP:
    """
    Create and return an SMTP client configured for TLS or SSL.

    Priority:
      - If SMTP_USE_SSL is True → use smtplib.SMTP_SSL (e.g., Gmail on 465).
      - Else → use smtplib.SMTP + optional STARTTLS if SMTP_USE_TLS is True.

    Typical configs:
      * SSL: SMTP_PORT=465, SMTP_USE_SSL=true,  SMTP_USE_TLS=false
      * TLS: SMTP_PORT=587, SMTP_USE_SSL=false, SMTP_USE_TLS=true
    """
    settings = get_settings()
    if not settings.SMTP_HOST:
        raise RuntimeError("SMTP_HOST is not configured. Please set it in .env.")

    if settings.SMTP_USE_SSL:
        server: smtplib.SMTP = smtplib.SMTP_SSL(
            settings.SMTP_HOST, settings.SMTP_PORT, timeout=30
        )
    else:
        server = smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30)
        if settings.SMTP_USE_TLS:
            server.starttls()

    return server


def send_email(
    to_emails: list[str],
    subject: str,
    text_body: str,
    html_body: str | None = None,
    from_header: str | None = None,
) -> None:
    """
    Send an email over SMTP.

    Parameters
    ----------
    to_emails:
        Recipient email addresses.
    subject:
        Email subject line.
    text_body:
        Plain-text body (fallback for clients without HTML support).
    html_body:
        Optional HTML body; if provided, is sent as an alternative part.
    from_header:
        "Name <address>" sender; defaults to EMAIL_FROM.

    Raises
    ------
    RuntimeError:
        If required SMTP configuration is missing.
    smtplib.SMTPException:
        If the underlying SMTP connection or send fails.
    """
    settings = get_settings()
    if not (settings.SMTP_HOST and settings.SMTP_USERNAME and settings.SMTP_PASSWORD):
        raise RuntimeError(
            "SMTP is not configured correctly. "
            "Please set SMTP_HOST, SMTP_USERNAME, and SMTP_PASSWORD in .env."
        )

    msg = EmailMessage()
    msg["From"] = from_header or settings.EMAIL_FROM
    msg["To"] = ", ".join(to_emails)
    msg["Subject"] = subject

    # Always add a plain-text part
    msg.set_content(text_body)

    if html_body:
        msg.add_alternative(html_body, subtype="html")

    server = _create_smtp_client()
    try:
        server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        server.send_message(msg)
    finally:
        try:
            server.quit()
        except smtplib.SMTPException:
            # Connection is being torn down anyway.
            pass


def send_email_via_function(
    to_emails: list[str],
    subject: str,
    html_body: str,
    from_header: str | None = None,
) -> None:
    """
    Invoke the Supabase edge function that sends email.

    The function receives {to, subject, html, from} as its JSON body.

    Raises
    ------
    supabase_functions.errors.FunctionsError:
        If the function returns a non-2xx status or cannot be reached.
    """
    settings = get_settings()
    functions_client().functions.invoke(
        settings.EMAIL_FUNCTION_NAME,
        invoke_options={
            "body": {
                "to": to_emails,
                "subject": subject,
                "html": html_body,
                "from": from_header or settings.EMAIL_FROM,
            }
        },
    )


def dispatch_email(
    to_emails: list[str],
    subject: str,
    text_body: str,
    html_body: str,
    from_header: str | None = None,
) -> None:
    """
    Send an email through the configured EMAIL_TRANSPORT.

    Usage in services:
        from airmates.core.email_client import dispatch_email

        dispatch_email(
            to_emails=[roommate.email],
            subject="Payment Request from AirMates",
            text_body="Plain text version...",
            html_body="<p>HTML version...</p>",
        )
    """
    if get_settings().EMAIL_TRANSPORT == "smtp":
        send_email(to_emails, subject, text_body, html_body, from_header)
    else:
        send_email_via_function(to_emails, subject, html_body, from_header)
