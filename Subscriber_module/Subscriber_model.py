"""
Subscriber model - one row per accepted landing page signup.
"""
from sqlalchemy import Column, Integer, String, DateTime, func, UniqueConstraint

from database import Base


class Subscriber(Base):
    """
    Email captured by the landing page forms. Rows are inserted once and
    never updated; duplicates are rejected by the unique constraint on email.
    """

    __tablename__ = "email_subscribers"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    source = Column(String(32), nullable=False, default="subscribe", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_email_subscribers_email"),
    )
