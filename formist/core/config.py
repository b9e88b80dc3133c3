from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "formist"
    ADMIN_TITLE: str = "Admin Panel"
    ADMIN_PREFIX: str = "/admin"
    API_PREFIX: str = "/api"
    AUTH_ENABLED: bool = False

    CORS_ENABLED: bool = False
    CORS_ORIGINS: str = "*"

    # Navigation routes are persisted only when a database is configured
    DATABASE_URL: str = ""

    LOCALE: str = "en"  # en | ru

    TABLE_DEFAULT_PAGE_SIZE: int = 10
    TABLE_MAX_PAGE_SIZE: int = 500

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
