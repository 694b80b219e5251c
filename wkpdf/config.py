"""Configuration loaded from environment (.env) and defaults."""

import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Locate the project root .env file regardless of CWD
_THIS_DIR = Path(__file__).resolve().parent          # wkpdf/
_PROJECT_ROOT = _THIS_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Package that ships the platform payloads (wkhtmltopdfmac, ...unix, ...win)
    wkpdf_resource_package: str = "wkpdf.bin"

    # Copy buffer used when extracting the executable
    wkpdf_chunk_size: int = 1024

    # Seconds to wait for one invocation; unset means wait forever
    wkpdf_timeout: float | None = None

    # Where the executable, stderr logs and HTML scratch files go (default: system temp)
    wkpdf_temp_dir: str | None = None

    wkpdf_log_level: str = "INFO"

    # CORS origins for the HTTP service (comma-separated)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Server port (hosting platforms inject PORT)
    port: int = 8000

    # Max HTML payload accepted by POST /api/convert (default 10 MB)
    max_html_bytes: int = 10 * 1024 * 1024

    @property
    def temp_dir(self) -> Path | None:
        if not self.wkpdf_temp_dir:
            return None
        return Path(self.wkpdf_temp_dir).resolve()

    @property
    def log_level(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        level = logging.getLevelName(self.wkpdf_log_level.upper())
        return level if isinstance(level, int) else logging.INFO

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def ensure_dirs(self) -> None:
        """Ensure the configured temp directory exists."""
        if self.temp_dir is not None:
            self.temp_dir.mkdir(parents=True, exist_ok=True)


def get_settings() -> Settings:
    settings = Settings()
    settings.ensure_dirs()
    return settings
