import logging

from fastapi import APIRouter, HTTPException, status

from Subscriber_module.Subscriber_schema import ErrorResponse
from .Notification_schema import SendTelegramRequest, SendTelegramResponse
from .notification_errors import TelegramDeliveryError
from . import telegram_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notifications"])


@router.post(
    "/send-telegram",
    response_model=SendTelegramResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def send_telegram(body: SendTelegramRequest):
    """Relay a landing page email submission to the team chat."""
    try:
        telegram_service.send_telegram_message(f"New email submission: {body.email}")
    except TelegramDeliveryError as e:
        logger.error(f"Telegram relay failed for {body.email}: {e} | details: {e.details}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "success": False,
                "message": str(e),
                "error": "Failed to send message to Telegram",
                "details": e.details,
            },
        )
    return SendTelegramResponse(message="Message sent to Telegram")
