from functools import lru_cache
from typing import Literal
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEV_SESSION_SECRET = "dev-session-secret-change-in-production"


class Settings(BaseSettings):
    # Storage
    database_url: str = "sqlite:///./content_studio.db"
    storage_backend: Literal["sql", "memory"] = "sql"

    # Auth
    session_secret: str = DEV_SESSION_SECRET
    session_algorithm: str = "HS256"
    session_max_age_days: int = 30
    google_client_id: str = ""

    # Logging
    log_format: Literal["console", "json"] = "console"
    log_level: str = "INFO"

    # App
    frontend_url: str = "http://localhost:3000"
    environment: str = "development"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def sqlalchemy_database_url(self) -> str:
        # Render/Heroku style URLs are not accepted by SQLAlchemy 2.x
        url = self.database_url
        if url.startswith("postgres://"):
            url = "postgresql://" + url[10:]
        return url

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    if settings.session_secret == DEV_SESSION_SECRET and settings.environment != "development":
        logger.warning("SESSION_SECRET is not set. Session tokens are signed with the development secret.")
    return settings
