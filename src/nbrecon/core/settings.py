"""Environment settings - loads NetBox credentials and runtime options from .env.

Priority:
1. Environment variables (highest priority)
2. .env file values
3. Default values in this file
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root: src/nbrecon/core/settings.py -> src/nbrecon/core/ -> src/nbrecon/ -> src/ -> project_root/
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class EnvSettings(BaseSettings):
    """Environment-based configuration loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # NetBox
    # =========================================================================
    netbox_url: str = ""
    netbox_token: str = ""
    netbox_verify_ssl: bool = True
    netbox_timeout: float = 30.0

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file_enabled: bool = False
    log_file_path: str = "logs/nbrecon.log"
    log_file_max_size_mb: int = 10
    log_file_backup_count: int = 5

    @property
    def netbox_configured(self) -> bool:
        """True when both URL and token are present."""
        return bool(self.netbox_url and self.netbox_token)


# =============================================================================
# Global Settings Instance
# =============================================================================

settings = EnvSettings()


__all__ = [
    "ENV_FILE_PATH",
    "EnvSettings",
    "PROJECT_ROOT",
    "settings",
]
