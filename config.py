import os
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

ENV_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env")

# Also expose .env values through os.getenv (pool tuning in database.py)
load_dotenv(dotenv_path=ENV_FILE)


class Settings(BaseSettings):
    DATABASE_URL: str = ""

    # Telegram chat relay
    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_CHAT_ID: Optional[str] = None
    TELEGRAM_API_BASE: str = "https://api.telegram.org"
    TELEGRAM_TIMEOUT_SECONDS: int = 10

    # SMTP welcome email
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False
    SMTP_TIMEOUT_SECONDS: int = 15
    MAIL_FROM_ADDRESS: Optional[str] = None
    MAIL_FROM_NAME: str = "Lingua Early Access"
    WELCOME_EMAIL_SUBJECT: str = "Welcome to the Lingua early access list"

    ALLOWED_ORIGINS: str = "*"
    ENVIRONMENT: str = "development"

    class Config:
        env_file = ENV_FILE
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
