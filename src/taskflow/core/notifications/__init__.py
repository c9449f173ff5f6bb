"""Notification utilities - email."""

from src.taskflow.core.notifications.email import (
    reset_password_link,
    send_reset_password_email,
    send_verification_email,
    verification_link,
)

__all__ = [
    "reset_password_link",
    "send_reset_password_email",
    "send_verification_email",
    "verification_link",
]
