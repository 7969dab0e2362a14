"""Transactional e-mail for BandMate, delivered through SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings

logger = logging.getLogger(__name__)

BRAND = "BandMate"


def describe_sendgrid_error(body: Any) -> str | None:
    """Turn a SendGrid error body (bytes, JSON text, dict or list) into one line."""

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body

    if isinstance(body, list):
        return "; ".join(str(item) for item in body)
    if not isinstance(body, dict):
        return None

    described = []
    for error in body.get("errors") or []:
        if not isinstance(error, dict) or not error.get("message"):
            continue
        text = str(error["message"])
        if error.get("help"):
            text += f" (help: {error['help']})"
        described.append(text)
    if described:
        return "; ".join(described)
    try:
        return json.dumps(body)
    except (TypeError, ValueError):
        return None


def _log_delivery_failure(source: Any, *, raised: bool) -> None:
    status_code = getattr(source, "status_code", None)
    details = describe_sendgrid_error(getattr(source, "body", None))
    verb = "request failed" if raised else "responded"

    if status_code is None and details is None:
        if raised:
            logger.error("Error sending email via SendGrid", exc_info=source)
        else:
            logger.error("SendGrid API responded without a status code")
        return

    message = f"SendGrid API {verb}"
    if status_code is not None:
        message += f" with status {status_code}"
    if details:
        message += f": {details}"
    logger.error(message)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Deliver one message; ``False`` when unconfigured or SendGrid refuses it."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid is not configured; email to %s skipped", recipient)
        return False

    mail = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )
    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(mail)
    except Exception as exc:
        _log_delivery_failure(exc, raised=True)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_delivery_failure(response, raised=False)
        return False

    logger.info("Sent email to %s: %s", recipient, subject)
    return True


def build_resource_url(resource_link: str | None) -> str | None:
    """Return the absolute web client URL for an in-app ``resource_link``."""

    if not resource_link:
        return None
    return f"{get_settings().app_url.rstrip('/')}/{resource_link.lstrip('/')}"


def _link(url: str, label: str) -> str:
    return f'<a href="{escape(url, quote=True)}">{escape(label)}</a>'


def send_notification_email(
    email: str,
    title: str,
    message: str,
    resource_link: str | None = None,
) -> bool:
    parts = [f"<h1>{BRAND}</h1>", f"<h2>{escape(title)}</h2>", f"<p>{escape(message)}</p>"]
    url = build_resource_url(resource_link)
    if url:
        parts.append(f"<p>{_link(url, f'View in {BRAND}')}</p>")
    parts.append(f"<p>This is an automated notification from {BRAND}.</p>")
    return send_email(f"[{BRAND}] {title}", "".join(parts), email)


def send_new_user_credentials_email(email: str, password: str) -> bool:
    """Welcome a freshly created member with their temporary credentials."""

    login_url = build_resource_url("/login")
    html_content = (
        f"<h1>{BRAND}</h1>"
        "<p>Your bandmates created an account for you.</p>"
        f"<p><strong>Email:</strong> {escape(email)}<br>"
        f"<strong>Password:</strong> {escape(password)}</p>"
        f"<p>Sign in at {_link(login_url, login_url)} and change your password.</p>"
    )
    return send_email(f"Welcome to {BRAND}", html_content, email)


def send_invitation_email(
    email: str,
    invite_link: str,
    *,
    inviter_name: str | None = None,
    project_names: list[str] | None = None,
) -> bool:
    """Invite someone to create their account through ``invite_link``."""

    who = escape(inviter_name) if inviter_name else "Your band"
    parts = [f"<h1>{BRAND}</h1>", f"<p>{who} invited you to join {BRAND}.</p>"]
    if project_names:
        listed = "".join(f"<li>{escape(name)}</li>" for name in project_names)
        parts.append(f"<p>You will have access to:</p><ul>{listed}</ul>")
    parts.append(f"<p>{_link(invite_link, 'Accept the invitation')}</p>")
    return send_email(f"You're invited to {BRAND}", "".join(parts), email)
