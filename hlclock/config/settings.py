import platform
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[2]


def _default_node_id() -> str:
    # Host names may contain the default field separator
    return (platform.node() or "unknown").replace("-", "_")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HLC_",
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Identity
    node_id: str = Field(default_factory=_default_node_id)

    # Clock
    max_clock_drift_millis: int = Field(default=3_600_000, ge=0)   # 1 hour
    counter_hex_digits: int = Field(default=4, gt=0)               # 0000..ffff
    separator: str = Field(default="-", min_length=1, max_length=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


settings = Settings()
