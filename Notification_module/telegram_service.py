"""
Telegram chat relay.
Posts a plain-text message to the configured chat through the Bot API sendMessage method.
"""
import logging
from typing import Any

import requests

from config import settings
from .notification_errors import TelegramDeliveryError

logger = logging.getLogger(__name__)

TELEGRAM_REQUEST_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _send_message_url(token: str) -> str:
    base = settings.TELEGRAM_API_BASE.rstrip("/")
    return f"{base}/bot{token}/sendMessage"


def _error_details(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text[:500]


def send_telegram_message(text: str) -> dict:
    """
    Send `text` to TELEGRAM_CHAT_ID.
    Returns the decoded Bot API response on success.
    Raises TelegramDeliveryError on missing configuration, transport error or non-2xx status.
    """
    token = (settings.TELEGRAM_BOT_TOKEN or "").strip()
    chat_id = (settings.TELEGRAM_CHAT_ID or "").strip()
    if not token or not chat_id:
        logger.error("Telegram relay not configured (TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID missing)")
        raise TelegramDeliveryError("Telegram relay is not configured")

    try:
        response = requests.post(
            _send_message_url(token),
            json={"chat_id": chat_id, "text": text},
            headers=TELEGRAM_REQUEST_HEADERS,
            timeout=settings.TELEGRAM_TIMEOUT_SECONDS,
        )
    except requests.exceptions.Timeout as e:
        logger.error(f"Telegram sendMessage timed out after {settings.TELEGRAM_TIMEOUT_SECONDS}s")
        raise TelegramDeliveryError("Telegram request timed out", details=str(e)) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Telegram sendMessage request failed: {e}")
        raise TelegramDeliveryError("Telegram request failed", details=str(e)) from e

    if not response.ok:
        details = _error_details(response)
        logger.error(f"Error sending message to Telegram | status: {response.status_code} | details: {details}")
        raise TelegramDeliveryError(
            f"Telegram returned HTTP {response.status_code}",
            details=details,
        )

    logger.info(f"Telegram message delivered to chat {chat_id}")
    try:
        return response.json()
    except ValueError:
        return {}
