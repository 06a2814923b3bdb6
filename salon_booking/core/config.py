from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    BUSINESS_TIMEZONE: str = "Europe/Berlin"
    DEFAULT_LANGUAGE: str = "en"

    SALON_API_BASE_URL: str | None = None
    SALON_API_TIMEOUT_SECONDS: float = 10.0

    AVAILABILITY_RETRY_ATTEMPTS: int = 2
    AVAILABILITY_RETRY_DELAY_SECONDS: float = 1.0

    FALLBACK_OPEN_HOUR: int = 10
    FALLBACK_LAST_SLOT_HOUR: int = 19
    FALLBACK_THINNING_ENABLED: bool = True
    FALLBACK_DROP_RATE: float = 0.3

    ADMIN_LOGIN_PATH: str = "/admin/login"
    BOOKING_ANCHOR: str = "booking"


settings = Settings()
