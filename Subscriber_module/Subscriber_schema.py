"""
Pydantic schemas for the landing page signup forms.
"""
import re
from typing import Any, Optional

from pydantic import BaseModel, Field, validator

# local@domain.tld, no whitespace anywhere
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def normalize_email(value: str) -> str:
    return value.strip().lower()


def is_valid_email(value: str) -> bool:
    return bool(value) and EMAIL_PATTERN.match(value) is not None


class SubscribeRequest(BaseModel):
    """Request body for POST /api/subscribe"""
    email: str = Field(..., min_length=1, max_length=255, description="Email address to subscribe")

    @validator("email")
    def validate_email(cls, v):
        if not is_valid_email(v):
            raise ValueError("Invalid email format")
        return normalize_email(v)

    class Config:
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "email": "user@example.com"
            }
        }


class EarlyAccessRequest(BaseModel):
    """Request body for POST /api/early-access (name fields are free text)"""
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=100)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=255)

    @validator("email")
    def validate_email(cls, v):
        if not is_valid_email(v):
            raise ValueError("Invalid email format")
        return normalize_email(v)

    class Config:
        str_strip_whitespace = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "firstName": "Ana",
                "lastName": "Silva",
                "email": "ana@example.com"
            }
        }


class SubscriberData(BaseModel):
    """Subscriber record as returned to the landing page"""
    id: int
    email: str
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    created_at: Optional[str] = Field(None, alias="createdAt", description="UTC ISO format string")

    class Config:
        populate_by_name = True


class SubscribeResponse(BaseModel):
    success: bool = True
    message: str
    subscriber: Optional[SubscriberData] = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response"""
    success: bool = False
    message: str
    error: str
    details: Optional[Any] = None
