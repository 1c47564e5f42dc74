"""
Environment configuration for the hostel laundry service.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from typing import List, Optional, Union
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)

DEMO_DATABASE_MARKER = "placeholder"


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    @staticmethod
    def get_secret_key_default() -> str:
        """Generate a default secret key if not provided"""
        import secrets
        import string
        alphabet = string.ascii_letters + string.digits
        return ''.join(secrets.choice(alphabet) for _ in range(32))

    # Application configuration
    APP_NAME: str = Field(default="Hostel Laundry Management", alias="PROJECT_NAME")
    API_VERSION: str = Field(default="1.0.0", alias="PROJECT_VERSION")
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    TIMEZONE: str = Field(default="UTC", alias="TIMEZONE")
    CORS_ORIGINS: Union[List[str], str] = Field(default=["*"], alias="BACKEND_CORS_ORIGINS")

    # Storage configuration. An unset or placeholder URL selects the fixture store.
    DATABASE_URL: Optional[str] = None
    DATABASE_ECHO: bool = Field(default=False, alias="DATABASE_ECHO")
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    DEMO_MODE: bool = False
    AUTO_CREATE_TABLES: bool = True

    # Security configuration
    JWT_SECRET_KEY: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    PASSWORD_BCRYPT_ROUNDS: int = 12

    # Email configuration
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = Field(default=None, alias="SMTP_USERNAME")
    SMTP_PASSWORD: Optional[str] = None
    SMTP_TLS: bool = True
    EMAIL_FROM_NAME: str = "Hostel Laundry Service"
    EMAIL_FROM_ADDRESS: Optional[str] = Field(default=None, alias="FROM_EMAIL")

    # Business rules
    STRICT_STATUS_TRANSITIONS: bool = False
    NOTIFICATION_LIST_LIMIT: int = 20
    ACTIVITY_LOG_LIMIT: int = 50
    DEFAULT_MAX_BATCHES_PER_DAY: int = 50

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "standard"
    LOG_TO_FILE: bool = True
    LOG_DIR: str = "logs"
    # Also emits activity_recorded events on the hostel_laundry.audit structlog logger
    ENABLE_STRUCTURED_LOGGING: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"
        populate_by_name = True

    # Validators
    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS_ORIGINS from string to list"""
        if isinstance(v, str):
            # Handle JSON string format from .env
            if v.startswith('[') and v.endswith(']'):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("standard", "json", "colored"):
            raise ValueError("LOG_FORMAT must be one of standard, json, colored")
        return v

    def is_demo_mode(self) -> bool:
        """Fixture store is used when forced or when no real database is configured"""
        if self.DEMO_MODE:
            return True
        return not self.DATABASE_URL or DEMO_DATABASE_MARKER in self.DATABASE_URL

    def is_email_configured(self) -> bool:
        return bool(self.SMTP_HOST)

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
