"""Email client using Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from uuid import UUID

import resend

from src.taskflow.core.config import get_settings
from src.taskflow.core.logging import get_logger

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

# Shared email styles
_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #2563eb; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
)
_LINK_STYLE = "color: #2563eb; word-break: break-all;"
_MUTED_STYLE = "color: #666; font-size: 14px;"


def verification_link(user_id: UUID, token: str) -> str:
    return f"{get_settings().public_base_url}/auth/verify-user/{user_id}/{token}"


def reset_password_link(user_id: UUID, token: str) -> str:
    return f"{get_settings().public_base_url}/auth/reset-password/{user_id}/{token}"


def _send(to: str, subject: str, html_body: str, email_type: str) -> bool:
    """Send one email through Resend, bounded by the configured timeout.

    Returns:
        True if the email was sent (or logged in dev mode), False on error
    """
    settings = get_settings()

    if not settings.resend_api_key:
        # Dev mode: log instead of sending
        logger.warning("RESEND_API_KEY not set - email not sent", email_type=email_type)
        return True

    resend.api_key = settings.resend_api_key

    def _deliver() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": subject,
                "html": html_body,
            }
        )

    try:
        future = _email_executor.submit(_deliver)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Email sent", email_type=email_type)
        return True
    except FuturesTimeoutError:
        logger.error(
            "Email send timed out",
            email_type=email_type,
            timeout=settings.email_send_timeout_seconds,
        )
        return False
    except Exception as e:
        logger.error("Failed to send email", email_type=email_type, error=str(e))
        return False


def send_verification_email(to: str, user_id: UUID, token: str, user_name: str) -> bool:
    """Send the account verification link to a newly registered user.

    Args:
        to: Recipient email address
        user_id: Id of the new account, part of the link path
        token: Signed verification token, part of the link path
        user_name: User's name for personalization

    Returns:
        True if email was sent (or logged in dev mode), False on error
    """
    settings = get_settings()
    return _send(
        to,
        f"Welcome to {settings.app_name}!",
        _get_verification_email_html(user_name, verification_link(user_id, token)),
        "verification",
    )


def send_reset_password_email(to: str, user_id: UUID, token: str, user_name: str) -> bool:
    """Send a password reset link.

    Returns:
        True if email was sent (or logged in dev mode), False on error
    """
    settings = get_settings()
    return _send(
        to,
        f"Reset your {settings.app_name} password",
        _get_reset_password_email_html(
            user_name, reset_password_link(user_id, token), settings.reset_token_expire_minutes
        ),
        "reset_password",
    )


def _get_verification_email_html(user_name: str, verification_url: str) -> str:
    """Generate HTML content for verification email."""
    safe_user_name = html.escape(user_name)
    safe_url = html.escape(verification_url)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h1 style="color: #2563eb; margin-bottom: 24px;">Confirm your account</h1>
    <p>Hi {safe_user_name},</p>
    <p>Thanks for registering! Please confirm your email address by clicking below:</p>
    <p style="margin: 32px 0;">
        <a href="{safe_url}" style="{_BUTTON_STYLE}">Confirm Account</a>
    </p>
    <p style="{_MUTED_STYLE}">
        Or copy and paste this link into your browser:<br>
        <a href="{safe_url}" style="{_LINK_STYLE}">{safe_url}</a>
    </p>
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        If you didn't create an account, you can safely ignore this email.
    </p>
</body>
</html>"""


def _get_reset_password_email_html(user_name: str, reset_url: str, expire_minutes: int) -> str:
    """Generate HTML content for password reset email."""
    safe_user_name = html.escape(user_name)
    safe_url = html.escape(reset_url)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h1 style="color: #2563eb; margin-bottom: 24px;">Reset your password</h1>
    <p>Hi {safe_user_name},</p>
    <p>We received a request to reset your password. Click below to choose a new one:</p>
    <p style="margin: 32px 0;">
        <a href="{safe_url}" style="{_BUTTON_STYLE}">Reset Password</a>
    </p>
    <p style="{_MUTED_STYLE}">
        Or copy and paste this link into your browser:<br>
        <a href="{safe_url}" style="{_LINK_STYLE}">{safe_url}</a>
    </p>
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        This link will expire in {expire_minutes} minutes. If you didn't request a
        password reset, you can safely ignore this email.
    </p>
</body>
</html>"""
