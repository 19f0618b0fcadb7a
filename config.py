"""
Centralized Configuration Management

All environment variables are defined here using Pydantic Settings.
This provides validation, type safety, and documentation in one place.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or a .env file.

    To use in your code:
        from config import settings
        base = settings.get_api_root()
    """

    # Database Configuration
    DB_URL: str = Field(default="mongodb://localhost:27017", description="MongoDB connection string")
    DB_NAME: str = Field(default="club_training_dev", description="Database name")

    # Hypermedia links are built from these, never from the incoming request
    API_BASE_URL: str = Field(
        default="http://localhost:8080", description="Public base URL used in hypermedia links"
    )
    API_PREFIX: str = Field(default="/api", description="Path prefix of all API routes")

    # Security
    SECRET_KEY: str = Field(..., description="JWT signing secret key")
    ADMIN_ROLE: str = Field(default="ADMIN", description="Role granting every mutating capability")

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(default=20, description="Page size when none is requested")
    MAX_PAGE_SIZE: int = Field(default=100, description="Upper bound for requested page sizes")

    # Facebook feed mirroring
    FB_GRAPH_API_URL: str = Field(
        default="https://graph.facebook.com/v19.0", description="Facebook Graph API root"
    )
    FB_PAGE_ID: str = Field(default="", description="Facebook page whose feed is mirrored")
    FB_ACCESS_TOKEN: str = Field(default="", description="Page access token for the Graph API")
    FB_TIMEOUT_SECONDS: float = Field(default=10.0, description="Graph API request timeout")

    # Application Settings
    DEBUG_LEVEL: int = Field(default=0, description="Debug verbosity level (0-3)")
    ENVIRONMENT: str = Field(
        default="development", description="Environment: development, staging, production"
    )

    # CORS Configuration
    CORS_ORIGINS: str = Field(
        default="*", description="Comma-separated list of allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("DEBUG_LEVEL")
    @classmethod
    def validate_debug_level(cls, v):
        if v not in [0, 1, 2, 3]:
            raise ValueError("DEBUG_LEVEL must be 0, 1, 2, or 3")
        return v

    @field_validator("API_BASE_URL", "API_PREFIX")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    def get_cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins into a list"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def get_api_root(self) -> str:
        """Absolute root of the API, e.g. http://localhost:8080/api"""
        return f"{self.API_BASE_URL}{self.API_PREFIX}"

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT.lower() == "production"


# Singleton instance - import this throughout your application
settings = Settings()
