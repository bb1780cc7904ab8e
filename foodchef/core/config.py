# foodchef/core/config.py
import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in {"0", "false", "no", ""}


def _env_list(name: str, default: str):
    return [x.strip() for x in os.getenv(name, default).split(",") if x.strip()]


@dataclass
class SmtpConfig:
    host: str = "localhost"
    port: int = 587
    username: str = ""
    password: str = ""
    use_tls: bool = True
    from_email: str = "noreply@foodchef.com"
    from_name: str = "Food Chef Cafe"
    timeout: float = 10.0


@dataclass
class TelegramConfig:
    bot_token: str = ""
    staff_chat_id: str = ""
    timeout: float = 2.0


class Settings:
    PROJECT_NAME: str = "Food Chef Cafe"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    DATABASE_URL: str = os.getenv("DATABASE_URL")
    AUTO_CREATE_TABLES: bool = _env_bool("AUTO_CREATE_TABLES", "1")

    # Restaurant capacity: every pending/confirmed booking holds one table for its slot
    TOTAL_TABLES: int = int(os.getenv("TOTAL_TABLES", "20"))

    # Static bearer keys for the JSON API; admin keys also unlock /admin
    API_KEYS = _env_list("API_KEYS", "food_chef_api_2024,mobile_app_key,admin_api_key")
    ADMIN_API_KEYS = _env_list("ADMIN_API_KEYS", "admin_api_key")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_RETENTION_DAYS: int = int(os.getenv("LOG_RETENTION_DAYS", "30"))

    # Email (customer notifications)
    SMTP_HOST: Optional[str] = os.getenv("SMTP_HOST")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME: str = os.getenv("SMTP_USERNAME", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    SMTP_USE_TLS: bool = _env_bool("SMTP_USE_TLS", "1")
    FROM_EMAIL: str = os.getenv("FROM_EMAIL", "noreply@foodchef.com")
    FROM_NAME: str = os.getenv("FROM_NAME", "Food Chef Cafe")
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "info@foodchef.com")

    # Telegram (staff alerts)
    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
    STAFF_CHAT_ID: str = os.getenv("STAFF_CHAT_ID", "")

    def smtp_config(self) -> SmtpConfig:
        return SmtpConfig(
            host=self.SMTP_HOST or "localhost",
            port=self.SMTP_PORT,
            username=self.SMTP_USERNAME,
            password=self.SMTP_PASSWORD,
            use_tls=self.SMTP_USE_TLS,
            from_email=self.FROM_EMAIL,
            from_name=self.FROM_NAME,
        )

    def telegram_config(self) -> TelegramConfig:
        return TelegramConfig(bot_token=self.TELEGRAM_BOT_TOKEN, staff_chat_id=self.STAFF_CHAT_ID)

    def api_key_roles(self) -> Dict[str, str]:
        roles = {key: "client" for key in self.API_KEYS}
        roles.update({key: "admin" for key in self.ADMIN_API_KEYS})
        return roles


settings = Settings()

if not settings.DATABASE_URL:
    # Fallback for local development when .env is missing
    print("⚠️ WARNING: DATABASE_URL not found. Using SQLite for local testing.")
    settings.DATABASE_URL = "sqlite:///./foodchef_local.db"
