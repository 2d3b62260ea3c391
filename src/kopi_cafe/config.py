from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./kopi_cafe.db"
    DATABASE_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # False keeps the historical behaviour: any known status may follow any other
    ENFORCE_STATUS_TRANSITIONS: bool = False
    DEFAULT_PAGE_SIZE: int = 10
    STAFF_ROLES: List[str] = ["STAFF", "ADMIN", "EMPLOYEE"]

    TELEGRAM_TOKEN: Optional[str] = None
    TELEGRAM_CHAT_ID: Optional[str] = None

    class Config:
        env_file = ".env"

settings = Settings()
