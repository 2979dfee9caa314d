"""
Subscriber router - email capture endpoints used by the landing page forms.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from deps import get_db
from Notification_module import email_service, telegram_service
from Notification_module.notification_errors import NotificationDeliveryError
from Utils.datetime_utils import to_utc_isoformat
from Utils.request_utils import get_client_ip
from .Subscriber_crud import DuplicateSubscriberError, create_subscriber
from .Subscriber_model import Subscriber
from .Subscriber_schema import (
    EarlyAccessRequest,
    ErrorResponse,
    SubscribeRequest,
    SubscribeResponse,
    SubscriberData,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Subscribers"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing field, invalid email or malformed JSON"},
    409: {"model": ErrorResponse, "description": "Email already subscribed"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
}

DUPLICATE_DETAIL = {
    "success": False,
    "message": "This email is already subscribed",
    "error": "Duplicate email",
}

UNEXPECTED_DETAIL = {
    "success": False,
    "message": "An unexpected error occurred",
    "error": "Internal server error",
}


def _subscriber_data(subscriber: Subscriber) -> SubscriberData:
    return SubscriberData(
        id=subscriber.id,
        email=subscriber.email,
        first_name=subscriber.first_name,
        last_name=subscriber.last_name,
        created_at=to_utc_isoformat(subscriber.created_at),
    )


def _store_subscriber(db: Session, source: str, email: str, **names) -> Subscriber:
    """Insert the subscriber, translating store failures into HTTP errors."""
    try:
        return create_subscriber(db=db, email=email, source=source, **names)
    except DuplicateSubscriberError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_DETAIL)
    except Exception as e:
        db.rollback()
        logger.error(f"Subscription error | source: {source} | email: {email} | {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=UNEXPECTED_DETAIL)


def _fan_out(subscriber: Subscriber) -> List[NotificationDeliveryError]:
    """
    Relay the signup to the team chat and send the welcome email.
    Both are attempted; returns the failures (empty when both were delivered).
    """
    failures: List[NotificationDeliveryError] = []

    try:
        telegram_service.send_telegram_message(
            f"New early access signup: {subscriber.first_name} {subscriber.last_name} {subscriber.email}"
        )
    except NotificationDeliveryError as e:
        failures.append(e)

    try:
        email_service.send_welcome_email(subscriber.email, subscriber.first_name or "")
    except NotificationDeliveryError as e:
        failures.append(e)

    return failures


@router.post(
    "/subscribe",
    response_model=SubscribeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def subscribe(
    body: SubscribeRequest,
    http_request: Request,
    db: Session = Depends(get_db),
):
    """
    Subscribe an email address to the waitlist.
    Returns 201 on success, 409 if the address is already subscribed.
    """
    logger.info(f"Subscribe request | email: {body.email} | IP: {get_client_ip(http_request)}")

    subscriber = _store_subscriber(db, "subscribe", body.email)

    return SubscribeResponse(
        success=True,
        message="Subscription successful",
        subscriber=_subscriber_data(subscriber),
    )


@router.post(
    "/early-access",
    response_model=SubscribeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def register_early_access(
    body: EarlyAccessRequest,
    http_request: Request,
    db: Session = Depends(get_db),
):
    """
    Register for early access (first name, last name, email).
    On success the signup is relayed to Telegram and a welcome email is sent.
    The subscriber row is kept even when a notification fails; the failure
    is still reported to the caller as an error.
    """
    logger.info(f"Early access request | email: {body.email} | IP: {get_client_ip(http_request)}")

    subscriber = _store_subscriber(
        db,
        "early_access",
        body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )

    failures = _fan_out(subscriber)
    if failures:
        channels = [failure.channel for failure in failures]
        logger.error(
            f"Early access notification failed | subscriber.id: {subscriber.id} | "
            f"channels: {channels} | errors: {[str(failure) for failure in failures]}"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "success": False,
                "message": "Signup saved but notification delivery failed",
                "error": "Notification delivery failed",
                "details": [
                    {"channel": failure.channel, "message": str(failure), "details": failure.details}
                    for failure in failures
                ],
            },
        )

    return SubscribeResponse(
        success=True,
        message="Early access registration successful",
        subscriber=_subscriber_data(subscriber),
    )
