# File: /boardview/core/config.py | Version: 1.0 | Title: Central App Settings (Pydantic v2)
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Database ---
    DATABASE_URL: str = "sqlite:///./boardview.db"

    # --- Deployment metadata (Sentry tags) ---
    ENVIRONMENT: str = "development"
    RELEASE: str = "boardview@0.1.0"

    # --- API behavior toggles ---
    ENABLE_STD_ERRORS: bool = (
        False  # set True in .env to enable standardized error responses
    )

    # --- Board engine defaults ---
    DEFAULT_INSERT_LAST: bool = True  # new cards appended to view.card_order
    WEEK_STARTS_ON: int = 0  # 0 = Monday, 6 = Sunday (relative date filters)

    # v2-style config
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
