"""Application configuration settings.

Settings are read from environment variables or a ``.env`` file. Logging sinks come
from a JSON file and mail subjects/links from a YAML file, both under ``config/``.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

from recipe_manager.core.config.logging_sink import LoggingSink

_CONFIG_DIR = Path(__file__).parent.parent.parent.parent / "config"

DEVELOPMENT = "development"


class _Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    APP_ENV: str = Field(default="production", alias="APP_ENV")
    BASE_PATH: str = Field(default="/api", alias="BASE_PATH")
    INTERNAL_PATH: str = Field(default="/internal", alias="INTERNAL_PATH")

    # Database; DATABASE_URL wins over the POSTGRES_* parts when set
    DATABASE_URL: str | None = Field(default=None, alias="DATABASE_URL")
    POSTGRES_HOST: str = Field(default="localhost", alias="POSTGRES_HOST")
    POSTGRES_PORT: int = Field(default=5432, alias="POSTGRES_PORT")
    POSTGRES_DB: str = Field(default="recipes", alias="POSTGRES_DB")
    POSTGRES_USER: str = Field(default="recipes", alias="POSTGRES_USER")
    POSTGRES_PASSWORD: str = Field(default="", alias="POSTGRES_PASSWORD")

    # Tokens
    TOKEN_SIGN_KEY: str = Field(..., alias="TOKEN_SIGN_KEY")
    TOKEN_VALIDITY_MINUTES: int = Field(default=60, alias="TOKEN_VALIDITY_MINUTES")
    REFRESH_TOKEN_VALIDITY_DAYS: int = Field(
        default=30, alias="REFRESH_TOKEN_VALIDITY_DAYS"
    )
    RESET_LINK_VALIDITY_HOURS: int = Field(
        default=12, alias="RESET_LINK_VALIDITY_HOURS"
    )

    # Recipes and pictures
    NOTIFICATION_RANGE_DAYS: int = Field(default=1, alias="NOTIFICATION_RANGE_DAYS")
    ORPHAN_PICTURE_MAX_AGE_HOURS: int = Field(
        default=24, alias="ORPHAN_PICTURE_MAX_AGE_HOURS"
    )
    IMAGE_DIMENSION: int = Field(default=1280, alias="IMAGE_DIMENSION")
    THUMBNAIL_DIMENSION: int = Field(default=320, alias="THUMBNAIL_DIMENSION")

    # Outgoing mail
    EMAIL_HOST: str = Field(default="localhost", alias="EMAIL_HOST")
    EMAIL_PORT: int = Field(default=587, alias="EMAIL_PORT")
    EMAIL_SECURE: bool = Field(default=False, alias="EMAIL_SECURE")
    EMAIL_USER: str = Field(default="", alias="EMAIL_USER")
    EMAIL_PASS: str = Field(default="", alias="EMAIL_PASS")
    EMAIL_FROM: str = Field(
        default="Recipe Manager <no-reply@localhost>", alias="EMAIL_FROM"
    )

    # Security and middleware settings
    ALLOWED_ORIGINS: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:8080",
        ],
        alias="ALLOWED_ORIGINS",
    )
    ENABLE_RATE_LIMITING: bool = Field(default=True, alias="ENABLE_RATE_LIMITING")
    RATE_LIMIT_PER_MINUTE: int = Field(default=300, alias="RATE_LIMIT_PER_MINUTE")

    LOGGING_CONFIG_PATH: str = Field(
        str((_CONFIG_DIR / "logging.json").resolve()),
        alias="LOGGING_CONFIG_PATH",
    )
    MAIL_CONFIG_PATH: str = Field(
        str((_CONFIG_DIR / "mail.yaml").resolve()),
        alias="MAIL_CONFIG_PATH",
    )

    _LOGGING_SINKS: list[LoggingSink] = PrivateAttr(default_factory=list)
    _MAIL_CONFIG: dict[str, Any] = PrivateAttr(default_factory=dict)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_default=True,
        extra="ignore",
    )

    def __init__(self) -> None:
        """Load the logging and mail configuration files after validation."""
        super().__init__()

        config_path = Path(self.LOGGING_CONFIG_PATH).expanduser().resolve()
        with config_path.open("r", encoding="utf-8") as f:
            config = json.load(f)
        self._LOGGING_SINKS = [
            LoggingSink.from_dict(s)
            for s in config.get("sinks", [])
            if isinstance(s, dict)
        ]

        try:
            mail_path = Path(self.MAIL_CONFIG_PATH).expanduser().resolve()
            with mail_path.open("r", encoding="utf-8") as f:
                self._MAIL_CONFIG = yaml.safe_load(f) or {}
        except (FileNotFoundError, yaml.YAMLError):
            # Templates fall back to their built-in subjects and relative links
            self._MAIL_CONFIG = {}

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == DEVELOPMENT

    @property
    def base_path(self) -> str:
        return self.BASE_PATH.rstrip("/")

    @property
    def internal_path(self) -> str:
        return self.INTERNAL_PATH.rstrip("/")

    @property
    def database_url(self) -> str:
        """Get the SQLAlchemy database URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def token_sign_key(self) -> str:
        return self.TOKEN_SIGN_KEY

    @property
    def token_validity_minutes(self) -> int:
        return self.TOKEN_VALIDITY_MINUTES

    @property
    def refresh_token_validity_days(self) -> int:
        return self.REFRESH_TOKEN_VALIDITY_DAYS

    @property
    def reset_link_validity_hours(self) -> int:
        """Get how long a password reset key stays usable."""
        return self.RESET_LINK_VALIDITY_HOURS

    @property
    def notification_range_days(self) -> int:
        """Get how far back the notification job looks for new recipes."""
        return self.NOTIFICATION_RANGE_DAYS

    @property
    def orphan_picture_max_age_hours(self) -> int:
        """Get the age after which unlinked pictures are deleted."""
        return self.ORPHAN_PICTURE_MAX_AGE_HOURS

    @property
    def image_dimension(self) -> int:
        return self.IMAGE_DIMENSION

    @property
    def thumbnail_dimension(self) -> int:
        return self.THUMBNAIL_DIMENSION

    @property
    def email_host(self) -> str:
        return self.EMAIL_HOST

    @property
    def email_port(self) -> int:
        return self.EMAIL_PORT

    @property
    def email_secure(self) -> bool:
        """Get whether SMTP uses implicit TLS instead of STARTTLS."""
        return self.EMAIL_SECURE

    @property
    def email_user(self) -> str:
        return self.EMAIL_USER

    @property
    def email_pass(self) -> str:
        return self.EMAIL_PASS

    @property
    def email_from(self) -> str:
        return self.EMAIL_FROM

    @property
    def mail_subjects(self) -> dict[str, str]:
        """Get mail subjects keyed by template name."""
        return dict(self._MAIL_CONFIG.get("subjects") or {})

    @property
    def mail_links(self) -> dict[str, str]:
        """Get frontend links used inside the mail templates."""
        return dict(self._MAIL_CONFIG.get("links") or {})

    @property
    def logging_sinks(self) -> list[LoggingSink]:
        return self._LOGGING_SINKS

    @property
    def allowed_origins(self) -> list[str]:
        """Get allowed origins for CORS."""
        return self.ALLOWED_ORIGINS

    @property
    def enable_rate_limiting(self) -> bool:
        """Get rate limiting enablement flag."""
        return self.ENABLE_RATE_LIMITING

    @property
    def rate_limit_per_minute(self) -> int:
        """Get rate limit per minute."""
        return self.RATE_LIMIT_PER_MINUTE


_settings: _Settings | None = None


def get_settings() -> _Settings:
    """Get application settings singleton.

    Returns:
        Application settings instance
    """
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = _Settings()
    return _settings


settings = get_settings()
