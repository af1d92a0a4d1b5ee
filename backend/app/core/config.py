from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "promo-service"
    version: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    APP_DOMAIN: str = "example.com"
    APP_DATABASE_DSN: str = "sqlite:////tmp/database.db"

    # Calendar dates (promo start/end) are evaluated in this zone unless the
    # tenant overrides it
    APP_TIMEZONE: str = "Africa/Douala"
    CURRENCY: str = "XAF"

    # Orders
    ORDER_NUMBER_PREFIX: str = "DMC"

    # Client session tokens
    CLIENT_JWT_SECRET: str = "change-me-client-secret"
    CLIENT_TOKEN_TTL_HOURS: int = 12

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"


settings = Settings()
