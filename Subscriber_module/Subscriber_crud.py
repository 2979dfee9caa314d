from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional
import logging

from .Subscriber_model import Subscriber
from .Subscriber_schema import normalize_email

logger = logging.getLogger(__name__)


class DuplicateSubscriberError(Exception):
    """Raised when the unique constraint on email rejects an insert."""

    def __init__(self, email: str):
        super().__init__(f"Email already subscribed: {email}")
        self.email = email


def create_subscriber(
    db: Session,
    email: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    source: str = "subscribe",
) -> Subscriber:
    """
    Insert a new subscriber.
    Uniqueness is left to the database constraint (no lookup before the insert),
    so two concurrent submissions of the same address produce exactly one row.
    Raises DuplicateSubscriberError if the email is already stored.
    """
    email = normalize_email(email)

    subscriber = Subscriber(
        email=email,
        first_name=first_name.strip() if first_name else None,
        last_name=last_name.strip() if last_name else None,
        source=source,
    )

    try:
        db.add(subscriber)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Duplicate subscriber rejected | email: {email} | source: {source} | {e.orig}")
        raise DuplicateSubscriberError(email) from e
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(subscriber)
    logger.info(f"Subscriber created: id={subscriber.id}, email={subscriber.email}, source={source}")
    return subscriber


def get_subscriber_by_email(
    db: Session,
    email: str
) -> Optional[Subscriber]:
    """Get subscriber by email"""
    email = normalize_email(email)
    return db.query(Subscriber).filter(Subscriber.email == email).first()


def count_subscribers_by_email(db: Session, email: str) -> int:
    email = normalize_email(email)
    return db.query(Subscriber).filter(Subscriber.email == email).count()
