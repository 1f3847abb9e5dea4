from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from src.api.common.constants.service_types import ServiceType
from src.api.contracts.constants import ArchiveErrorCode, DEFAULT_ARCHIVE_REASON


class ArchiveResult(BaseModel):
    """
    Uniform outcome of every archive operation.

    Callers branch on `success`; expected failures carry `error` and
    `error_code` instead of being raised.
    """
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_code: Optional[ArchiveErrorCode] = None
    warnings: List[str] = Field(default_factory=list)


class ArchiveRequest(BaseModel):
    """Schema for archiving a contract"""
    user_id: str
    reason: str = DEFAULT_ARCHIVE_REASON


class RestoreRequest(BaseModel):
    """Schema for restoring an archived contract"""
    user_id: str


class PurgeRequest(BaseModel):
    """Schema for purging old archived contracts"""
    days_old: Optional[int] = Field(default=None, ge=0)
    partner_uuid: Optional[str] = Field(default=None, min_length=1)


class PurgeSummary(BaseModel):
    """Outcome of a permanent delete"""
    deleted_count: int
    contract_ids: List[int] = Field(default_factory=list)


class ArchiveAnalytics(BaseModel):
    """Aggregates over the archived contracts of a partner"""
    total_archived: int = 0
    archived_this_month: int = 0
    archived_this_year: int = 0
    total_archived_value: float = 0.0
    by_service_type: Dict[str, int] = Field(
        default_factory=lambda: {service_type.value: 0 for service_type in ServiceType})

