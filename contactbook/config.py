from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"
DEFAULT_STORAGE_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # Storage settings
    STORAGE_BACKEND: Literal["memory", "file", "redis"] = "file"
    STORAGE_DIR: str | None = None
    CONTACTS_KEY: str = "contacts"

    # Redis settings (only used when STORAGE_BACKEND=redis)
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 20

    # =================================================================
    # SIMULATED NETWORK LATENCY - off unless explicitly enabled
    # =================================================================
    SIMULATE_LATENCY: bool = False
    SIMULATED_LATENCY_MAX_MS: int = 800

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def storage_path(self) -> Path:
        """Directory used by the file storage backend."""
        if self.STORAGE_DIR:
            return Path(self.STORAGE_DIR)
        return DEFAULT_STORAGE_DIR

    def get_latency_config(self) -> dict:
        """
        Get latency simulator configuration.
        Production never simulates latency, whatever the flag says.
        """
        config = {
            "enabled": self.SIMULATE_LATENCY,
            "max_delay_ms": max(0, self.SIMULATED_LATENCY_MAX_MS),
        }

        if self.environment == "production":
            config["enabled"] = False

        return config


settings = Settings()
