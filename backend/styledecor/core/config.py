from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import field_validator, model_validator
from typing import Annotated, Any, ClassVar
from decimal import Decimal
import json
from pathlib import Path
import os


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", case_sensitive=True)

    # Identity tokens are verified with this key (provide a fallback for local development)
    SECRET_KEY: str = "fallback_secret_for_dev_only"
    ALGORITHM: str = "HS256"
    # When set, tokens must carry a matching ``aud`` claim
    TOKEN_AUDIENCE: str = ""
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Database URL
    # Use an absolute path so running the app from different directories
    # always resolves the same DB file.
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]
    SQLALCHEMY_DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'styledecor.db'}"

    # CORS origins; the client domain is always allowed
    CORS_ORIGINS: Annotated[list[str], NoDecode] = []
    CLIENT_DOMAIN: str = "http://localhost:5173"

    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Stripe checkout
    STRIPE_SECRET_KEY: str = ""
    STRIPE_API_BASE: str = "https://api.stripe.com/v1"
    PAYMENT_TIMEOUT_SECONDS: float = 10.0
    CHECKOUT_CURRENCY: str = "bdt"

    # Share of a completed booking's price kept by the platform
    PLATFORM_COMMISSION_RATE: Decimal = Decimal("0.30")
    # Admin revenue historically sums every booking; flip to leave out cancellations
    STATS_REVENUE_EXCLUDE_CANCELLED: bool = False

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Any) -> list[str]:
        """Parse comma-separated or JSON list of origins from environment."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("SECRET_KEY", "STRIPE_SECRET_KEY", "CLIENT_DOMAIN", mode="before")
    def strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("PLATFORM_COMMISSION_RATE")
    def commission_in_range(cls, v: Decimal) -> Decimal:
        if v < 0 or v > 1:
            raise ValueError("PLATFORM_COMMISSION_RATE must be between 0 and 1")
        return v

    @model_validator(mode="after")
    def include_client_domain(cls, values: "Settings") -> "Settings":
        domain = values.CLIENT_DOMAIN.rstrip("/")
        if domain and domain not in values.CORS_ORIGINS:
            values.CORS_ORIGINS = [*values.CORS_ORIGINS, domain]
        return values


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[3] / ".env")))


settings = load_settings()
