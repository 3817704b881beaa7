"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, SecretStr, field_validator, model_validator


DEFAULT_JWT_SECRET = "change-me-in-production"


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="FoodFly", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # MongoDB settings
    mongo_uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    mongo_db_name: str = Field(default="foodfly", description="MongoDB database name")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database connection retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB connection attempts"
    )
    seed_catalog_on_startup: bool = Field(
        default=True, description="Load the restaurant catalogue when it is empty"
    )

    # Auth settings
    jwt_secret: SecretStr = Field(
        default=SecretStr(DEFAULT_JWT_SECRET), description="JWT signing key"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_lifetime_hours: int = Field(
        default=24 * 7, ge=1, description="Lifetime of issued tokens in hours"
    )
    google_client_id: Optional[str] = Field(
        default=None, description="Google OAuth client id (audience of ID tokens)"
    )
    google_tokeninfo_url: str = Field(
        default="https://oauth2.googleapis.com/tokeninfo",
        description="Endpoint used to validate Google ID tokens",
    )

    # Menu image pipeline
    unsplash_access_key: Optional[str] = Field(
        default=None, description="Unsplash API access key"
    )
    unsplash_api_url: str = Field(
        default="https://api.unsplash.com", description="Unsplash API base URL"
    )
    cloudinary_cloud_name: Optional[str] = Field(
        default=None, description="Cloudinary cloud name"
    )
    cloudinary_api_key: Optional[str] = Field(
        default=None, description="Cloudinary API key"
    )
    cloudinary_api_secret: Optional[SecretStr] = Field(
        default=None, description="Cloudinary API secret"
    )
    image_batch_size: int = Field(
        default=5, ge=1, description="Menu images processed per batch"
    )
    image_batch_delay_sec: float = Field(
        default=1.0, ge=0, description="Pause between image batches"
    )
    http_timeout_sec: float = Field(
        default=15.0, gt=0, description="Timeout for outbound HTTP calls"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(default="FoodFly API", description="API documentation title")
    api_description: str = Field(
        default="Food delivery and personal chef booking platform",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @model_validator(mode="after")
    def require_jwt_secret_in_production(self):
        """Refuse to sign tokens with the built-in secret in production"""
        if (
            self.environment == Environment.PRODUCTION
            and self.jwt_secret.get_secret_value() == DEFAULT_JWT_SECRET
        ):
            raise ValueError("JWT_SECRET must be set in production")
        return self

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()
