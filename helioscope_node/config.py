from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env relative to the project root (one level up from the package)
_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """
    Process-level settings for Helioscope Node.
    Reads from environment variables and .env file.
    Node identity and probe selection live in the TOML config file instead.
    """
    model_config = SettingsConfigDict(env_file=str(_ENV_FILE), env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # TOML node config location, overridable with --config-file
    CONFIG_FILE: str = "helioscope-node.toml"

    # Window used by psutil to measure per-core utilization
    CPU_SAMPLE_INTERVAL_SECONDS: float = 0.2


settings = Settings()
