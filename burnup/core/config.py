from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import model_validator
from pathlib import Path
import os
import logging

logger = logging.getLogger("burnup.config")


class Settings(BaseSettings):
    # Use environment variables with prefix BURNUP_ and an optional dotenv file
    # selected through BURNUP_ENV_FILE (see below).
    model_config = SettingsConfigDict(
        env_prefix="BURNUP_",
        env_file_encoding="utf-8",
        extra="forbid",  # surface unknown env vars as errors
    )

    LOG_LEVEL: str = "info"

    # Output tree: <OUTPUT_ROOT>/<dir>/<label> <YYYY-MM-DD>.csv
    OUTPUT_ROOT: str = "Burnup"
    SNAPSHOT_DIR: str = "Snapshots"
    AUDIT_DIR: str = "Audits"
    TOTALS_DIR: str = "Totals"
    SNAPSHOT_LABEL: str = "Backlog Snapshot"
    AUDIT_LABEL: str = "No Points"
    TOTALS_LABEL: str = "Totals"

    # Jira export timestamps look like "14/Mar/24 9:05 AM"
    SOURCE_DATE_FORMAT: str = "%d/%b/%y %I:%M %p"
    # utf-8-sig drops the BOM Jira prepends to exports
    INPUT_ENCODING: str = "utf-8-sig"

    # When False the latest activity day is left out of the totals report
    TOTALS_INCLUDE_LAST_DAY: bool = True

    @model_validator(mode="after")
    def _validate_output_names(self) -> "Settings":
        names = {
            "OUTPUT_ROOT": self.OUTPUT_ROOT,
            "SNAPSHOT_DIR": self.SNAPSHOT_DIR,
            "AUDIT_DIR": self.AUDIT_DIR,
            "TOTALS_DIR": self.TOTALS_DIR,
            "SNAPSHOT_LABEL": self.SNAPSHOT_LABEL,
            "AUDIT_LABEL": self.AUDIT_LABEL,
            "TOTALS_LABEL": self.TOTALS_LABEL,
        }
        empty = sorted(name for name, value in names.items() if not value.strip())
        if empty:
            raise ValueError("Output names must not be empty: " + ", ".join(empty))
        return self


def _resolve_env_files_from_override(base_dir: Path) -> str | tuple[str, ...] | None:
    """Resolve optional override for dotenv file(s) using BURNUP_ENV_FILE.

    Supports absolute or relative paths (relative to base_dir) and
    comma-separated list for multiple env files (later items override earlier).
    """
    override = os.getenv("BURNUP_ENV_FILE")
    if not override:
        return None

    def to_abs(p: str) -> str:
        path = Path(p)
        if not path.is_absolute():
            path = base_dir / p
        return str(path)

    parts = [p.strip() for p in override.split(",") if p.strip()]
    if not parts:
        return None
    if len(parts) == 1:
        return to_abs(parts[0])
    return tuple(to_abs(p) for p in parts)


def load_settings(base_dir: Path | None = None) -> Settings:
    """Build Settings, honoring BURNUP_ENV_FILE when present."""
    env_file = _resolve_env_files_from_override(base_dir or Path.cwd())
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


def log_settings(current: Settings) -> None:
    """Log settings at startup."""
    logger.info("Configuration loaded: %s", current)
