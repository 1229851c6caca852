from datetime import timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via .env file or environment variables.
    """

    # Database
    DATABASE_URL: str = "sqlite:///./family_loans.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    AUTO_CREATE_TABLES: bool = True

    # Sessions (cookie tokens are signed with SECRET_KEY)
    SECRET_KEY: str = "family-loans-dev-secret-change-me"
    SESSION_TTL_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "family_loans_session"

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # Application
    APP_NAME: str = "Family Loans API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS from comma-separated string"""
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def session_cookie_secure(self) -> bool:
        """Session cookie is only sent over HTTPS in production"""
        return self.is_production

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(hours=self.SESSION_TTL_HOURS)


# Global settings instance
settings = Settings()
