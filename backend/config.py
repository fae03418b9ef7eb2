"""
Configuration module for the Invoice Dashboard backend.

Loads environment variables (and a local .env file) into a Settings singleton.
Required values are checked on import unless VALIDATE_CONFIG=false.
"""
import logging
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)

# HS256 keys shorter than the digest size are rejected by validate()
MIN_SESSION_SECRET_LENGTH = 32


class Settings:
    """Application settings loaded from environment variables."""

    # Database (Supabase/PostgREST). The server-side key is used because the
    # dashboard owns the invoices, customers and users tables outright.
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SECRET_KEY: str = os.getenv("SUPABASE_SECRET_KEY", "")

    # Sessions: HS256-signed JWT in an HttpOnly cookie
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "")
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "session")
    SESSION_TTL_MINUTES: int = int(os.getenv("SESSION_TTL_MINUTES", "720"))

    # Upper bound for one page's concurrent reads
    FETCH_TIMEOUT_SECONDS: float = float(os.getenv("FETCH_TIMEOUT_SECONDS", "10"))

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Only consulted in production; other environments allow every origin
    CORS_ORIGINS: List[str] = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:8000"
    ).split(",")

    @classmethod
    def validate(cls) -> None:
        """
        Check required settings and sanity-check the session configuration.

        Raises:
            ValueError: Listing every missing or invalid setting.
        """
        problems = [
            f"{key} is not set"
            for key, value in {
                "SUPABASE_URL": cls.SUPABASE_URL,
                "SUPABASE_SECRET_KEY": cls.SUPABASE_SECRET_KEY,
                "SESSION_SECRET": cls.SESSION_SECRET,
            }.items()
            if not value
        ]

        if cls.SESSION_SECRET and len(cls.SESSION_SECRET) < MIN_SESSION_SECRET_LENGTH:
            problems.append(
                f"SESSION_SECRET must be at least {MIN_SESSION_SECRET_LENGTH} characters"
            )
        if cls.SESSION_TTL_MINUTES <= 0:
            problems.append("SESSION_TTL_MINUTES must be positive")
        if cls.FETCH_TIMEOUT_SECONDS <= 0:
            problems.append("FETCH_TIMEOUT_SECONDS must be positive")

        if problems:
            raise ValueError(
                f"Invalid configuration: {'; '.join(problems)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT.lower() == "development"

    @classmethod
    def session_max_age_seconds(cls) -> int:
        return cls.SESSION_TTL_MINUTES * 60


# Create a singleton instance
settings = Settings()

# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # Development keeps running so the landing page can still be served
        if not settings.is_development():
            raise
        logger.warning(f"{e} The app may not work correctly until it is configured.")
