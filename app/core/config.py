"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. The service starts without Firebase credentials (routes
that need Firestore then answer 503), which keeps local runs and tests simple.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; validate_settings checks the storage backend
    and numeric ranges at load time.
    """

    # App
    app_name: str = "ohplus-backoffice"
    app_version: str = "1.0.0"
    debug: bool = False
    # Public URL of the web app, used for links inside emails and PDFs.
    app_url: str = "http://localhost:3000"

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    # Project whose ID tokens are accepted; defaults to the service account project.
    firebase_project_id: str | None = None
    firebase_storage_bucket: str | None = None

    # Storage: "local" (filesystem) or "firebase" (Firebase Storage bucket)
    storage_backend: str = "local"
    storage_root: str = "./storage"
    storage_base_url: str | None = None
    max_upload_size: int = 25 * 1024 * 1024  # 25MB, Resend attachment limit

    # Email (Resend). Without an API key emails are logged, not sent.
    resend_api_key: SecretStr | None = None
    resend_api_url: str = "https://api.resend.com"
    email_from_default: str = "noreply@ohplus.aix.ph"

    # Vendor CMS for LED players
    cms_base_url: str = "https://cms-novacloud-272363630855.asia-southeast1.run.app/api/v1"
    cms_timeout_seconds: float = 15.0
    # Vendor callback for asynchronous results (brightness, screenshot, configuration).
    cms_notice_url: str = ""

    # Company details printed on documents when the company record has none
    company_name: str = "OH Plus"
    company_address: str = ""

    # Business defaults
    # Calendar used for booking dates; the web app stores local midnight.
    business_timezone: str = "Asia/Manila"
    quotation_validity_days: int = 5
    default_page_size: int = 10
    max_page_size: int = 100
    page_cache_max_queries: int = 256
    # Cached list pages are refetched after this long.
    page_cache_ttl_seconds: float = 300.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate storage backend and numeric ranges.

        - firebase storage: FIREBASE_STORAGE_BUCKET required.
        - page sizes must be positive and default <= max.
        """
        backend = self.storage_backend.lower()
        if backend == "firebase":
            if not self.firebase_storage_bucket:
                raise ValueError(
                    "FIREBASE_STORAGE_BUCKET is required when storage_backend is 'firebase'. "
                    "Set it in environment or .env file."
                )
        elif backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'local', 'firebase'"
            )
        if self.default_page_size < 1 or self.max_page_size < self.default_page_size:
            raise ValueError(
                "DEFAULT_PAGE_SIZE must be >= 1 and not larger than MAX_PAGE_SIZE"
            )
        if self.page_cache_ttl_seconds <= 0:
            raise ValueError("PAGE_CACHE_TTL_SECONDS must be positive")
        if self.quotation_validity_days < 0:
            raise ValueError("QUOTATION_VALIDITY_DAYS cannot be negative")
        try:
            ZoneInfo(self.business_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"Unknown BUSINESS_TIMEZONE '{self.business_timezone}'"
            ) from None
        return self

    @property
    def business_tz(self) -> ZoneInfo:
        """Business timezone as a tzinfo."""
        return ZoneInfo(self.business_timezone)

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
