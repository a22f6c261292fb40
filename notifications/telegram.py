import logging

import pytz
import requests
from django.conf import settings
from django.utils.html import escape

logger = logging.getLogger(__name__)

SEND_MESSAGE_URL = "https://api.telegram.org/bot{token}/sendMessage"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def local_time(value):
    """Convert an aware datetime to the library's wall clock for display."""
    return value.astimezone(pytz.timezone(settings.LIBRARY_TIME_ZONE))


def loan_alert(heading, loan, *details):
    """
    Build the HTML body of a staff alert about ``loan``.

    ``details`` are extra ``(label, value)`` pairs appended after the
    borrower and book lines. Values are escaped here.
    """
    lines = [
        f"<b>{heading}</b>",
        f"👤 <b>User</b>: {escape(loan.user.name)} ({escape(loan.user.email)})",
        f"📖 <b>Book</b>: {escape(loan.book.title)} by {escape(loan.book.author)}",
    ]
    lines += [f"<b>{label}</b>: {escape(str(value))}" for label, value in details]
    lines.append(f"🧾 <b>Loan ID</b>: {loan.id}")
    return "\n".join(lines)


def post_staff_alert(text: str, silent: bool = False) -> bool:
    """
    Post ``text`` to the staff Telegram chat.

    Alerts are best effort: a disabled or misconfigured bot, a network error,
    or a refusal from Telegram is logged and reported as False, never raised.
    """
    if not settings.TELEGRAM_NOTIFICATIONS_ENABLED:
        return False

    token, chat_id = settings.TELEGRAM_BOT_TOKEN, settings.TELEGRAM_CHAT_ID
    if not (token and chat_id):
        logger.warning("Telegram alerts enabled but bot token or chat id is missing")
        return False

    try:
        response = requests.post(
            SEND_MESSAGE_URL.format(token=token),
            json={
                "chat_id": chat_id,
                "text": text,
                "parse_mode": "HTML",
                "disable_web_page_preview": True,
                "disable_notification": silent,
            },
            timeout=6,
        )
        response.raise_for_status()
        delivered = bool(response.json().get("ok"))
    except requests.RequestException as e:
        logger.warning(f"Staff alert not delivered: {e}")
        return False

    if not delivered:
        logger.warning("Staff alert refused by Telegram")
    return delivered
