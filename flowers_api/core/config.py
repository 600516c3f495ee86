"""
Configuration helpers for the invoicing backend.

Exposes a frozen Settings object that reads environment variables (storage
backend, data file, SMTP, PDF service, ...) so that routers/services do not
fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[1] / "data.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    data_file: Path
    storage_in_memory: bool
    database_url: str
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    smtp_from: str
    pdf_service_url: str
    pdf_timeout_seconds: float
    log_level: str
    company_name: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "json").strip().lower(),
        data_file=Path(os.getenv("DATA_FILE") or DEFAULT_DATA_FILE),
        # read-only filesystems (serverless hosts) keep the document in memory
        storage_in_memory=_bool(os.getenv("STORAGE_IN_MEMORY"), _bool(os.getenv("VERCEL"), False)),
        database_url=os.getenv("DATABASE_URL", ""),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        smtp_from=os.getenv("SMTP_FROM", os.getenv("SMTP_USER", "")),
        pdf_service_url=os.getenv("PDF_SERVICE_URL", "").rstrip("/"),
        pdf_timeout_seconds=_float(os.getenv("PDF_TIMEOUT_SECONDS", "30"), 30.0),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        company_name=os.getenv("COMPANY_NAME", "JCW Flowers"),
    )
