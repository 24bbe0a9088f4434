"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Firestore credentials are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Firestore commits accept at most this many writes.
FIRESTORE_MAX_BATCH_WRITES = 500


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except the Firestore
    credentials validated in validate_required.
    """

    # App
    app_name: str = "fitmyphone"
    app_version: str = "1.0.0"
    debug: bool = False
    public_base_url: str = "https://fitmyphone.in"

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    # Falls back to the service account's project_id when unset.
    firebase_project_id: str | None = None
    # Web API key for Identity Toolkit (email/password sign-up and sign-in).
    firebase_web_api_key: SecretStr | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:9002"

    # Contributions, import, search
    contribution_reward_points: int = 10
    bulk_write_batch_size: int = FIRESTORE_MAX_BATCH_WRITES
    search_min_term_length: int = 2
    analytics_log_window: int = 1000
    leaderboard_size: int = 50
    max_upload_size: int = 10 * 1024 * 1024  # 10MB

    # LLM suggestion service (OpenAI-compatible chat completions)
    llm_api_url: str = "https://openrouter.ai/api/v1/chat/completions"
    llm_api_key: SecretStr | None = None
    llm_model: str = "google/gemini-2.0-flash-001"
    llm_timeout_seconds: float = 30.0

    # One-off admin creation: POST /auth/bootstrap-admin with this secret.
    bootstrap_admin_secret: SecretStr | None = None

    # Request / middleware
    request_id_header: str = "X-Request-ID"

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
        """Validate required env and numeric limits.

        - FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - BULK_WRITE_BATCH_SIZE between 1 and the Firestore commit limit.
        """
        has_key = (
            self.firebase_service_account_key
            and self.firebase_service_account_key.get_secret_value()
        )
        if not has_key and not self.firebase_service_account_path:
            raise ValueError(
                "Set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
            )
        if not 1 <= self.bulk_write_batch_size <= FIRESTORE_MAX_BATCH_WRITES:
            raise ValueError(
                f"BULK_WRITE_BATCH_SIZE must be between 1 and {FIRESTORE_MAX_BATCH_WRITES}, "
                f"got: {self.bulk_write_batch_size}"
            )
        if self.search_min_term_length < 1:
            raise ValueError("SEARCH_MIN_TERM_LENGTH must be at least 1")
        if self.contribution_reward_points < 0:
            raise ValueError("CONTRIBUTION_REWARD_POINTS must not be negative")
        return self

    @property
    def llm_configured(self) -> bool:
        return bool(self.llm_api_key and self.llm_api_key.get_secret_value())


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
