"""
Configuration settings for the liturgy document service.
Loads environment variables and provides application-wide settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service
    APP_NAME: str = "Liturgy DOCX API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: str = "*"

    # Download
    DEFAULT_FILENAME: str = "liturgy.docx"

    # Typography (points)
    BODY_FONT: str = "Times New Roman"
    BODY_FONT_SIZE: float = 12
    TITLE_FONT_SIZE: float = 16
    SUBTITLE_FONT_SIZE: float = 12
    SECTION_FONT_SIZE: float = 14
    REFERENCE_FONT_SIZE: float = 10
    TEXT_FONT_SIZE: float = 12

    # Page layout (twips, 1440 = 1 inch)
    PAGE_MARGIN_TWIPS: int = 1440
    COLUMN_WIDTH_TWIPS: int = 4680  # half of a Letter page minus margins

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into a list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
