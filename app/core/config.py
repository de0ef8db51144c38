"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables (and .env)
- Centralizes Stripe, Supabase and CORS settings
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator, ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional, Literal


# Local dev origins the Vite frontend runs on
DEV_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Frontend / CORS
    FRONTEND_URL: str = Field(
        default="http://localhost:5173",
        description="Public URL of the SPA; used for redirects and CORS"
    )
    CORS_EXTRA_ORIGINS: List[str] = Field(
        default_factory=list,
        description="Additional allowed CORS origins (JSON list)"
    )

    # Stripe
    STRIPE_SECRET_KEY: Optional[str] = Field(
        default=None,
        description="Stripe secret API key"
    )
    STRIPE_WEBHOOK_SECRET: Optional[str] = Field(
        default=None,
        description="Signing secret for the Stripe webhook endpoint"
    )
    STRIPE_API_VERSION: str = Field(
        default="2024-06-20",
        description="Pinned Stripe API version"
    )
    STRIPE_WEBHOOK_TOLERANCE: int = Field(
        default=300,
        description="Maximum webhook timestamp age in seconds"
    )
    CHECKOUT_CURRENCY: str = Field(default="usd")
    PRODUCT_NAME: str = Field(default="SmartSaver Premium")

    # Supabase (auth + profile storage)
    SUPABASE_URL: Optional[str] = Field(
        default=None,
        description="Supabase project URL, e.g. https://xyz.supabase.co"
    )
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(
        default=None,
        description="Service role key used for profile writes"
    )
    SUPABASE_TIMEOUT: float = Field(
        default=10.0,
        description="Supabase request timeout in seconds"
    )
    PROFILES_TABLE: str = Field(default="profiles")
    PRICE_DROPS_TABLE: str = Field(default="price_drop_subscriptions")

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    DEBUG_ROUTES: Optional[bool] = Field(
        default=None,
        validate_default=True,
        description="Expose GET /debug/routes (defaults to on in development only)"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    PORT: int = Field(default=3000)

    @field_validator("FRONTEND_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Redirect URLs are built as FRONTEND_URL + '/path'."""
        return v.rstrip("/")

    @field_validator("STRIPE_SECRET_KEY")
    @classmethod
    def validate_stripe_key(cls, v, info: ValidationInfo):
        """Ensure the Stripe key is set in production."""
        if info.data.get("ENVIRONMENT") == "production" and not v:
            raise ValueError("STRIPE_SECRET_KEY is required in production environment")
        return v

    @field_validator("DEBUG_ROUTES")
    @classmethod
    def default_debug_routes(cls, v, info: ValidationInfo) -> bool:
        """Unset means on in development, off everywhere else."""
        if v is None:
            return info.data.get("ENVIRONMENT") == "development"
        return v

    @property
    def allowed_origins(self) -> List[str]:
        """FRONTEND_URL, the local dev origins and any extras, deduplicated."""
        origins: List[str] = []
        for origin in [self.FRONTEND_URL, *DEV_ORIGINS, *self.CORS_EXTRA_ORIGINS]:
            if origin and origin not in origins:
                origins.append(origin)
        return origins

    @property
    def stripe_configured(self) -> bool:
        return bool(self.STRIPE_SECRET_KEY)

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.FRONTEND_URL:
        errors.append("FRONTEND_URL is required")

    # Production-specific validations
    if settings.is_production:
        if not settings.STRIPE_SECRET_KEY:
            errors.append("STRIPE_SECRET_KEY is required in production")
        if not settings.STRIPE_WEBHOOK_SECRET:
            errors.append("STRIPE_WEBHOOK_SECRET is required in production")
        if not settings.supabase_configured:
            errors.append("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
