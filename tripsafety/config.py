"""
TripSafety Configuration — pydantic-settings based.

All settings are read from TRIPSAFETY_* environment variables or a .env file.
Scoring weights and thresholds are fixed in the engine and not configurable.
"""

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(
        default="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        description="logging.basicConfig format string",
    )

    # ── Audit ──
    audit_enabled: bool = Field(
        default=True, description="Write every assessment to the audit log"
    )
    audit_log_path: str = Field(
        default="risk_audit.jsonl", description="Path to JSON-lines audit log file"
    )

    # ── Trend ──
    trend_default_days: int = Field(
        default=30, ge=1, description="Default look-back window for risk trends"
    )

    model_config = {
        "env_prefix": "TRIPSAFETY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance — imported by other modules
settings = Settings()
