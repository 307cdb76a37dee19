from pydantic import SecretStr
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str
    # Certificate checks on the Postgres TLS connection; off only for poolers with self-signed certs
    DATABASE_SSL_VERIFY: bool = True

    # --- reCAPTCHA ---
    # Secret stays server-side: only the relay reads it, via get_secret_value()
    RECAPTCHA_SECRET_KEY: SecretStr
    RECAPTCHA_SITE_KEY: str = ""
    RECAPTCHA_VERIFY_URL: str = "https://www.google.com/recaptcha/api/siteverify"
    # Unset -> the form view reaches the relay in-process
    RECAPTCHA_RELAY_BASE_URL: str | None = None

    # --- GOOGLE SHEETS MIRROR ---
    SHEETS_WEBHOOK_URL: str | None = None

    HTTP_TIMEOUT_SECONDS: float = 10.0

    DEBUG: bool = False
    ENV: str = "dev"  # "dev" or "prod"
    LOG_LEVEL: str = "INFO"

    # --- RATE LIMITING ---
    REDIS_URL: str | None = None
    # Rewrites redis:// to rediss:// for managed Redis; turn off for a local server
    REDIS_TLS: bool = True
    RATE_LIMIT_ENABLED: bool = True
    VERIFY_RATE_LIMIT: str = "30/minute"
    SUBMIT_RATE_LIMIT: str = "10/minute"

    SUCCESS_PATH: str = "/success"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
