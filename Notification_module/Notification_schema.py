from pydantic import BaseModel, Field


class SendTelegramRequest(BaseModel):
    """Request body for POST /api/send-telegram"""
    email: str = Field(..., min_length=1, max_length=255, description="Submitted email to relay")

    class Config:
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "email": "user@example.com"
            }
        }


class SendTelegramResponse(BaseModel):
    message: str = "Message sent to Telegram"
