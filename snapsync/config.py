"""Configuration management for the SnapSync interpolation engine.

Loads and validates environment variables using Pydantic settings.
"""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SnapSyncConfig(BaseSettings):
    """Interpolation engine configuration loaded from environment variables.

    Every field can be overridden with a ``SNAPSYNC_``-prefixed variable,
    e.g. ``SNAPSYNC_BUFFER_TIME=0.15``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SNAPSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Buffering
    buffer_time: float = Field(default=0.1, gt=0.0)
    buffer_limit: int = Field(default=32, ge=2, le=1024)
    send_interval: float = Field(default=0.05, gt=0.0)

    # Timescale control law
    catchup_speed: float = Field(default=0.02, ge=0.0, lt=1.0)
    slowdown_speed: float = Field(default=0.04, ge=0.0, lt=1.0)
    catchup_negative_threshold: float = Field(default=-1.0)
    catchup_positive_threshold: float = Field(default=1.0)
    ema_smoothing: float = Field(default=0.1, gt=0.0, le=1.0)
    mode: Literal["adaptive", "simple"] = Field(default="adaptive")

    # Jitter-based buffer time
    dynamic_adjustment: bool = Field(default=False)
    dynamic_adjustment_tolerance: float = Field(default=1.0, ge=0.0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )

    @model_validator(mode="after")
    def validate_thresholds(self) -> "SnapSyncConfig":
        """Ensure the catch-up dead zone is non-empty."""
        if self.catchup_negative_threshold >= self.catchup_positive_threshold:
            raise ValueError(
                "catchup_negative_threshold must be below catchup_positive_threshold "
                f"(got {self.catchup_negative_threshold} >= "
                f"{self.catchup_positive_threshold})"
            )
        return self

    @property
    def absolute_negative_threshold(self) -> float:
        """Negative drift threshold in seconds."""
        return self.send_interval * self.catchup_negative_threshold

    @property
    def absolute_positive_threshold(self) -> float:
        """Positive drift threshold in seconds."""
        return self.send_interval * self.catchup_positive_threshold


# Singleton configuration instance
_config: SnapSyncConfig | None = None


def get_config() -> SnapSyncConfig:
    """Get the global configuration instance.

    Returns:
        SnapSyncConfig: Configuration singleton
    """
    global _config
    if _config is None:
        _config = SnapSyncConfig()
    return _config
