from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BANKSYSTEM_", env_file=".env", extra="ignore")

    # Use the common instance name format used by SSMS, e.g. .\SQLEXPRESS
    db_server: str = r".\SQLEXPRESS"
    db_name: str = "BankSystem"
    db_trusted_connection: bool = True
    db_user: str | None = None
    db_password: str | None = None
    db_driver: str = "ODBC Driver 17 for SQL Server"

    # Full SQLAlchemy URL; when set, the ODBC parts above are ignored (e.g. sqlite:///bank.db).
    database_url: str | None = None

    jwt_secret: str = "change-me"
    jwt_expire_minutes: int = 60

    auth_cookie_name: str = "banksystem_auth"
    auth_cookie_samesite: str = "lax"  # lax|strict|none
    auth_cookie_secure: bool = False

    # Identity lockout
    lockout_max_failed_attempts: int = 5
    lockout_minutes: int = 5

    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8000,http://127.0.0.1:8000"

    # Account and card numbering
    bank_country_code: str = "BG"
    bank_code: str = "ABCJ"
    card_bin: str = "427842"
    card_valid_years: int = 4

    email_sender_address: str = "noreply@banksystem.local"
    email_sender_name: str = "Bank System"
    sendgrid_api_key: str | None = None
    sendgrid_api_url: str = "https://api.sendgrid.com/v3/mail/send"
    email_timeout_seconds: int = 10

    log_level: str = "INFO"
    log_json: bool = True


settings = Settings()
