import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from directory_admin.core.config import Settings
from directory_admin.domain.outcomes import PendingResetEmail

logger = logging.getLogger(__name__)


def _reset_link(settings: Settings, reset_token: str) -> str | None:
    if not settings.frontend_url:
        return None
    return f"{settings.frontend_url.rstrip('/')}/reset-password?token={reset_token}"


def build_password_reset_message(settings: Settings, pending: PendingResetEmail) -> MIMEMultipart:
    """Build the multipart reset email for one pending token."""
    expires = settings.password_reset_token_expire_minutes
    message = MIMEMultipart("alternative")
    message["Subject"] = "Password Reset Request"
    message["From"] = settings.smtp_from_email
    message["To"] = pending.email

    reset_link = _reset_link(settings, pending.raw_token)
    if reset_link:
        text = f"""
We received a request to reset the password for your {pending.kind.label} account.

Please open the following link to reset your password:
{reset_link}

This link will expire in {expires} minutes.

If you did not request this, please ignore this email.
        """
        html = f"""
<html>
  <body>
    <p>We received a request to reset the password for your {pending.kind.label} account.</p>
    <p><a href="{reset_link}">Reset Password</a></p>
    <p>Or copy and paste this link into your browser:</p>
    <p>{reset_link}</p>
    <p><strong>Important:</strong> This link will expire in {expires} minutes.</p>
    <p>If you did not request this, please ignore this email.</p>
  </body>
</html>
        """
    else:
        # FRONTEND_URL not configured - just include the token
        text = f"""
We received a request to reset the password for your {pending.kind.label} account.

Your password reset token is:
{pending.raw_token}

This token will expire in {expires} minutes.

If you did not request this, please ignore this email.
        """
        html = f"""
<html>
  <body>
    <p>We received a request to reset the password for your {pending.kind.label} account.</p>
    <p>Your password reset token is:</p>
    <p><code>{pending.raw_token}</code></p>
    <p>This token will expire in {expires} minutes.</p>
    <p>If you did not request this, please ignore this email.</p>
  </body>
</html>
        """

    message.attach(MIMEText(text, "plain"))
    message.attach(MIMEText(html, "html"))
    return message


async def send_password_reset_email(settings: Settings, pending: PendingResetEmail) -> None:
    """
    Send a password reset email.

    Raises:
        ValueError: If SMTP is not configured.
        aiosmtplib.SMTPException: If the SMTP conversation fails.
    """
    if not settings.smtp_configured:
        logger.warning("SMTP not configured - cannot send password reset email")
        raise ValueError("SMTP is not configured. Please configure SMTP settings in .env file.")

    message = build_password_reset_message(settings, pending)

    send_kwargs = {
        "hostname": settings.smtp_host,
        "port": settings.smtp_port,
        "username": settings.smtp_user,
        "password": settings.smtp_password,
    }

    # Port 465 uses direct TLS, everything else STARTTLS
    if settings.smtp_use_tls:
        if settings.smtp_port == 465:
            send_kwargs["use_tls"] = True
        else:
            send_kwargs["start_tls"] = True

    await aiosmtplib.send(message, **send_kwargs)


async def deliver_password_reset_email(settings: Settings, pending: PendingResetEmail) -> bool:
    """
    Best-effort delivery used as a background task.

    Failures are logged and never reach the client, so the reset request
    answer stays the same whether or not the email went out.
    """
    try:
        await send_password_reset_email(settings, pending)
    except (ValueError, aiosmtplib.SMTPException, OSError) as e:
        logger.error("Failed to send password reset email: %s", e)
        return False
    logger.info("Password reset email sent for a %s account", pending.kind.value)
    return True
