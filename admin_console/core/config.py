"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. SECRET_KEY is validated at load time; Firebase
credentials are optional so the console can start (and report 503 on
sign-in) when the backend is not configured.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Console settings loaded from environment and .env."""

    # App
    app_name: str = "admin-console"
    app_version: str = "1.0.0"
    debug: bool = False

    # Session cookie (signed JWT carrying the console session id)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    session_expire_minutes: int = 480  # 8 hours
    session_cookie_name: str = "console_session"
    session_cookie_secure: bool = True
    # How long a protected page waits for the admin lookup before showing "loading".
    gate_settle_timeout_seconds: float = 5.0

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    http_timeout_seconds: float = 30.0

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    # Overrides project_id from the service account (e.g. emulator project).
    firebase_project_id: str | None = None
    # Web API key for Identity Toolkit (email/password sign-in).
    firebase_web_api_key: SecretStr | None = None
    identity_toolkit_base_url: str = "https://identitytoolkit.googleapis.com/v1"
    secure_token_base_url: str = "https://securetoken.googleapis.com/v1"
    firestore_base_url: str = "https://firestore.googleapis.com/v1"

    # Callable Cloud Function that creates the company's users
    functions_region: str = "us-central1"
    functions_base_url: str | None = None  # default: https://{region}-{project}.cloudfunctions.net
    provisioning_function_name: str = "createCompanyWithUsers"

    # Record store layout
    companies_collection: str = "companies"
    admins_collection: str = "admins"
    default_company_classification: str = "INVENTORY_CONTRACTOR"
    # Off: tax id is checked for length only. On: CNPJ check digits are verified too.
    strict_tax_id_validation: bool = False

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env.

        - SECRET_KEY signs the session cookie and is always required.
        - Firebase settings are validated lazily by the lifespan wiring.
        """
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.session_expire_minutes <= 0:
            raise ValueError("SESSION_EXPIRE_MINUTES must be positive")
        return self

    @property
    def firebase_auth_configured(self) -> bool:
        """True when email/password sign-in can be attempted."""
        return bool(
            self.firebase_web_api_key
            and self.firebase_web_api_key.get_secret_value()
        )


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
