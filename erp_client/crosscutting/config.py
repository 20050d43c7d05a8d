"""
Name: Client Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables when the client is built
  - Provide defaults that match the ERP API contract

Collaborators:
  - container.py: reads settings to wire storage, HTTP client and services
  - crosscutting/logger.py: reads log level and format
  - infrastructure/http/error_interceptor.py: auth allow-list and login route

Constraints:
  - No business logic, pure configuration

Notes:
  - Environment variables use the ERP_ prefix (ERP_API_BASE_URL, ...)
  - Singleton via lru_cache
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SAME_SITE_VALUES = {"Strict", "Lax", "None"}


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Attributes:
        api_base_url: Base URL of the ERP REST API
        api_timeout_seconds: Per-request timeout (default: 30)
        storage_dir: Directory holding the cookie jar and local storage files
        session_storage_key: Storage key of the persisted session
        remember_me_storage_key: Storage key of the login-form prefill data
        session_cookie_max_age_days: Lifetime of a remembered session (default: 30)
        session_cookie_secure: Flag the session cookie as secure
        session_cookie_same_site: Strict|Lax|None (default: Strict)
        auth_public_paths: Auth endpoints where a 401 means "wrong credentials"
        login_route: Route the navigator is sent to when the session expires
        default_page_size: Page size used when a list call gives none
        log_level: Logging level (default: INFO)
        log_json: Emit JSON log lines (default: True)
        app_env: Application environment (development/production)
    """

    # API
    api_base_url: str = "http://localhost:3000/api"
    api_timeout_seconds: float = 30.0

    # Environment
    app_env: str = "development"

    # Session persistence
    storage_dir: Path = Path.home() / ".erp_client"
    session_storage_key: str = "auth-storage"
    remember_me_storage_key: str = "login-remember-me-data"
    session_cookie_max_age_days: int = 30
    session_cookie_secure: bool = True
    session_cookie_same_site: str = "Strict"

    # Auth routing
    auth_public_paths: list[str] = [
        "/auth/login",
        "/auth/register",
        "/auth/forgot-password",
        "/auth/reset-password",
    ]
    login_route: str = "/login"

    # Lists
    default_page_size: int = 10

    # Observability
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("api_timeout_seconds")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("api_timeout_seconds must be greater than 0")
        return v

    @field_validator("session_cookie_max_age_days")
    @classmethod
    def cookie_max_age_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("session_cookie_max_age_days must be greater than 0")
        return v

    @field_validator("default_page_size")
    @classmethod
    def page_size_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("default_page_size must be greater than 0")
        return v

    @field_validator("session_cookie_same_site")
    @classmethod
    def same_site_valid(cls, v: str) -> str:
        value = (v or "Strict").strip().capitalize()
        if value not in _SAME_SITE_VALUES:
            raise ValueError("session_cookie_same_site must be Strict, Lax or None")
        return value

    @field_validator("auth_public_paths")
    @classmethod
    def auth_paths_must_be_absolute(cls, v: list[str]) -> list[str]:
        for path in v:
            if not path.startswith("/"):
                raise ValueError(f"auth path must start with '/': {path!r}")
        return [path.rstrip("/") or "/" for path in v]

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if self.is_production() and not self.session_cookie_secure:
            raise ValueError("ERP_SESSION_COOKIE_SECURE must be true in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    @property
    def cookie_jar_path(self) -> Path:
        return self.storage_dir / "cookies.json"

    @property
    def local_storage_path(self) -> Path:
        return self.storage_dir / "local_storage.json"

    model_config = SettingsConfigDict(
        env_prefix="ERP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
