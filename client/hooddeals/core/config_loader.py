# client/hooddeals/core/config_loader.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    API_BASE_URL: str = "https://hood-deals-3827cb9a0599.herokuapp.com"

    # (connect, read) seconds; no request may hang a screen indefinitely
    REQUEST_CONNECT_TIMEOUT: float = 5.0
    REQUEST_READ_TIMEOUT: float = 20.0

    SESSION_DB_PATH: str = "hooddeals_storage.sqlite3"
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    MESSAGE_PAGE_SIZE: int = 20
    INBOX_PAGE_SIZE: int = 20

    DISPLAY_TIMEZONE: str = "UTC"
    TOKEN_EXPIRY_LEEWAY_SECONDS: int = 30

    environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def request_timeout(self):
        return (self.REQUEST_CONNECT_TIMEOUT, self.REQUEST_READ_TIMEOUT)


settings = Settings()
