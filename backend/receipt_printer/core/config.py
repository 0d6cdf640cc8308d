"""
Application settings (pydantic-settings)
Every value can be overridden through environment variables or .env
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ========================================================================
    # APP
    # ========================================================================
    APP_NAME: str = "Receipt Printer"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # ========================================================================
    # RENDERER
    # ========================================================================
    PAPER_WIDTH: int = 48  # 80mm paper, font A; 32 for 58mm
    STRICT_CONDITIONS: bool = False
    HONOR_TEMPLATE_WIDTH: bool = True
    MAX_BOX_DEPTH: int = 32


settings = Settings()
