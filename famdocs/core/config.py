"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # User data
    data_dir: Path = Field(
        default=Path("./data"),
        description="Root directory of per-user JSON data (data/users/<uid>/).",
    )
    default_user_id: str = Field(
        default="uid_default",
        description="User id used when a request carries no valid X-User-ID.",
    )

    # Strategy Selection
    renderer_type: str = Field(
        default="pdf",
        description="Document renderer strategy to use: 'pdf' or 'docx'.",
    )
    storage_type: str = Field(
        default="local",
        description="Document storage strategy to use: 'local' or 'supabase'.",
    )

    # File Storage
    upload_dir: Path = Field(
        default=Path("./uploads"),
        description="Directory for generated documents (local storage).",
    )

    # Supabase Storage
    supabase_url: str = Field(
        default="",
        description="Supabase project URL.",
    )
    supabase_key: str = Field(
        default="",
        description="Supabase service role key.",
    )
    supabase_bucket: str = Field(
        default="documents",
        description="Storage bucket for generated documents.",
    )

    # OCR.space
    ocr_space_api_key: str = Field(
        default="",
        description="OCR.space API key. OCR is disabled when empty.",
    )
    ocr_space_url: str = Field(
        default="https://api.ocr.space/parse/imageurl",
        description="OCR.space endpoint reading a file by URL.",
    )
    ocr_language: str = Field(
        default="fre",
        description="OCR.space language code.",
    )
    ocr_timeout_seconds: float = Field(
        default=12.0,
        description="Timeout of one OCR request.",
    )
    ocr_cache_ttl_seconds: float = Field(
        default=1800.0,
        description="How long OCR results (including failures) are cached.",
    )

    # Attachments
    attachment_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout of one attachment download.",
    )
    max_attachment_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Largest attachment read for text extraction.",
    )
    min_text_length: int = Field(
        default=10,
        description="Shorter PDF text layers are treated as scans.",
    )
    max_text_length: int = Field(
        default=10_000,
        description="Extracted text is truncated to this many characters.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )

    @field_validator("upload_dir", "data_dir")
    @classmethod
    def ensure_dir(cls, v: Path) -> Path:
        """Ensure the directory exists."""
        v.mkdir(parents=True, exist_ok=True)
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @property
    def ocr_enabled(self) -> bool:
        return bool(self.ocr_space_api_key)

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logger.setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
