from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.storage import STORAGE_VOLUME_JOB_DEFAULT_TIMEOUT
from .quantity import (
    DEFAULT_CAPACITY_TOLERANCE,
    AbsoluteTolerance,
    BlockAlignedTolerance,
    RelativeTolerance,
    TolerancePolicy,
)


class Settings(BaseSettings):
    # Capacity comparison
    capacity_tolerance_bytes: int = Field(
        default=DEFAULT_CAPACITY_TOLERANCE, alias="IRMC_CAPACITY_TOLERANCE_BYTES"
    )
    tolerance_mode: str = Field(default="absolute", alias="IRMC_TOLERANCE_MODE")
    tolerance_ratio: float = Field(default=0.01, alias="IRMC_TOLERANCE_RATIO")
    block_size_bytes: int = Field(default=1024 * 1024, alias="IRMC_BLOCK_SIZE_BYTES")

    # Storage volumes
    volume_job_timeout: int = Field(
        default=STORAGE_VOLUME_JOB_DEFAULT_TIMEOUT, alias="IRMC_VOLUME_JOB_TIMEOUT"
    )  # seconds

    # Logging
    log_json: bool = Field(default=False, alias="IRMC_LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", populate_by_name=True
    )


settings = Settings()


def tolerance_policy(cfg: Settings | None = None) -> TolerancePolicy:
    """Build the capacity tolerance policy selected by ``cfg``."""
    cfg = cfg or settings
    mode = cfg.tolerance_mode.lower()
    if mode == "absolute":
        return AbsoluteTolerance(cfg.capacity_tolerance_bytes)
    if mode == "relative":
        return RelativeTolerance(cfg.tolerance_ratio)
    if mode == "block":
        return BlockAlignedTolerance(cfg.block_size_bytes)
    raise ValueError(f"Unknown tolerance mode: {cfg.tolerance_mode}")
