"""
core/config.py
──────────────
Centralised application settings via ``pydantic-settings``.

All configuration is driven by environment variables (or a ``.env`` file
in the ``backend/`` directory).  ``pydantic-settings`` validates types at
startup, so malformed values fail fast with a clear error message.

Supabase credentials are optional: leaving them blank keeps the data
gateway in its "not ready" state, which list views render as empty and
point reads / writes report as ``503``.

Usage
-----
    from core.config import get_settings

    settings = get_settings()
    print(settings.PANCHAYAT_TARGET)
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the backend/ directory so relative .env paths work from any cwd.
_BACKEND_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables / ``.env`` file.

    Attributes:
        APP_TITLE:        Human-readable API name shown in OpenAPI docs.
        APP_VERSION:      Semantic version string.
        APP_DESCRIPTION:  Short description shown in the OpenAPI UI.
        DEBUG:            Enable verbose logging.
        LOG_LEVEL:        Root log level when ``DEBUG`` is off.
        SUPABASE_URL:     Supabase project URL (blank = gateway not ready).
        SUPABASE_KEY:     Supabase anon or service-role key.
        SUPABASE_RETRY_SECONDS:     Initial reconnect delay after a failed connect.
        SUPABASE_RETRY_MAX_SECONDS: Cap for the exponential reconnect delay.
        PANCHAYAT_TARGET: Entrepreneurs per panchayat counted as 100 % progress.
        FRONTEND_URL:     Optional deployed frontend origin for CORS.
    """

    model_config = SettingsConfigDict(
        env_file=str(_BACKEND_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        # Extra env vars are ignored; don't raise on unexpected keys.
        extra="ignore",
    )

    # ── API metadata ──────────────────────────────────────────────────────
    APP_TITLE: str = "Village Entrepreneur Directory API"
    APP_VERSION: str = "0.3.0"
    APP_DESCRIPTION: str = (
        "Directory, success stories, training resources, community board "
        "and panchayat progress dashboard for the youth entrepreneur program."
    )

    # ── Feature flags ─────────────────────────────────────────────────────
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── Supabase (optional until the gateway is connected) ────────────────
    SUPABASE_URL: str = Field(default="", description="Supabase project URL")
    SUPABASE_KEY: str = Field(default="", description="Supabase anon or service-role key")
    SUPABASE_RETRY_SECONDS: float = Field(
        default=2.0,
        gt=0,
        description="First delay before retrying a failed Supabase connection.",
    )
    SUPABASE_RETRY_MAX_SECONDS: float = Field(
        default=60.0,
        gt=0,
        description="Upper bound for the doubling reconnect delay.",
    )

    # ── Dashboard ─────────────────────────────────────────────────────────
    PANCHAYAT_TARGET: int = Field(
        default=1000,
        description="Registered entrepreneurs per panchayat that count as 100 % progress.",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    # Optional extra origin injected by the hosting environment.
    FRONTEND_URL: str = ""

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """
        Build the full CORS allow-list.

        Hard-coded dev origins plus the optional ``FRONTEND_URL`` env var.

        Returns:
            List of allowed origin strings.
        """
        origins: List[str] = [
            "http://localhost:5173",   # Vite / React dev server
            "http://127.0.0.1:5173",
        ]
        if self.FRONTEND_URL:
            origins.append(self.FRONTEND_URL)
        return origins

    @property
    def supabase_configured(self) -> bool:
        """True when both Supabase credentials are present."""
        return bool(self.SUPABASE_URL and self.SUPABASE_KEY)

    @field_validator("PANCHAYAT_TARGET")
    @classmethod
    def _target_must_be_positive(cls, v: int) -> int:
        """Progress is ``total / target`` so the target must be positive."""
        if v <= 0:
            raise ValueError("PANCHAYAT_TARGET must be a positive integer")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalise_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Unknown LOG_LEVEL '{v}'")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached ``Settings`` singleton.

    The instance is created (and the ``.env`` file parsed) only once per
    process lifetime, courtesy of ``functools.lru_cache``.

    Returns:
        Settings: Validated application configuration.
    """
    return Settings()
