import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict

BASEROW_URL = "https://api.baserow.io"
TELEGRAM_API_URL = "https://api.telegram.org"
NOTIFY_TIMEZONE = "Europe/Moscow"


class Settings(BaseModel):
    """Process-wide secrets and endpoints. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    baserow_api_token: Optional[str] = None
    baserow_table_id: Optional[str] = None
    tg_bot_token: Optional[str] = None
    tg_chat_id: Optional[str] = None
    baserow_url: str = BASEROW_URL
    telegram_api_url: str = TELEGRAM_API_URL
    notify_timezone: str = NOTIFY_TIMEZONE

    @property
    def store_configured(self) -> bool:
        return bool(self.baserow_api_token and self.baserow_table_id)

    @property
    def notifier_configured(self) -> bool:
        return bool(self.tg_bot_token and self.tg_chat_id)


def load_settings() -> Settings:
    return Settings(
        baserow_api_token=os.getenv("BASEROW_API_TOKEN"),
        baserow_table_id=os.getenv("BASEROW_TABLE_ID"),
        tg_bot_token=os.getenv("TG_BOT_TOKEN"),
        tg_chat_id=os.getenv("TG_CHAT_ID"),
        baserow_url=os.getenv("BASEROW_URL", BASEROW_URL).rstrip("/"),
        telegram_api_url=os.getenv("TELEGRAM_API_URL", TELEGRAM_API_URL).rstrip("/"),
        notify_timezone=os.getenv("NOTIFY_TIMEZONE", NOTIFY_TIMEZONE),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
