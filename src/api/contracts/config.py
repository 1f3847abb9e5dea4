import os
from pydantic import BaseModel, ConfigDict, Field
from dotenv import load_dotenv
from src.api.contracts.constants import CascadeMode, DEFAULT_RETENTION_DAYS

load_dotenv()


class ArchiveConfig(BaseModel):
    """Settings of the contract archive lifecycle, read from the environment"""
    cascade_mode: CascadeMode = Field(
        default_factory=lambda: os.getenv("ARCHIVE_CASCADE_MODE", CascadeMode.BEST_EFFORT.value))
    cascade_max_attempts: int = Field(
        default_factory=lambda: os.getenv("ARCHIVE_CASCADE_MAX_ATTEMPTS", "3"), ge=1)
    purge_batch_size: int = Field(
        default_factory=lambda: os.getenv("PURGE_BATCH_SIZE", "500"), ge=1)
    retention_days: int = Field(
        default_factory=lambda: os.getenv("ARCHIVE_RETENTION_DAYS", str(DEFAULT_RETENTION_DAYS)), ge=0)
    # Keep the discarded archive reason in the restore activity entry
    retain_archive_reason_on_restore: bool = Field(
        default_factory=lambda: os.getenv("RETAIN_ARCHIVE_REASON_ON_RESTORE", "false"))

    model_config = ConfigDict(validate_default=True)
