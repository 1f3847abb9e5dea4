from typing import Optional, Dict, Any
from sqlmodel import Field, Column, JSON
from src.api.common.models.base import BaseModel, TimestampMixin


class ActivityLog(BaseModel, TimestampMixin, table=True):
    """
    Audit trail of user actions on partner data
    """
    id: Optional[int] = Field(default=None, primary_key=True)

    partner_uuid: Optional[str] = Field(default=None, index=True)
    user_id: Optional[str] = Field(default=None, index=True)

    action_category: str = Field(index=True, description="Area of the action (e.g., 'contract', 'booking')")
    action_type: str = Field(index=True, description="What happened (e.g., 'archived', 'restored', 'deleted')")

    entity_id: Optional[str] = Field(default=None, index=True)
    entity_type: Optional[str] = None

    description: str
    details: Dict[str, Any] = Field(default={}, sa_column=Column(JSON), description="Additional data about the action")

    class Config:
        from_attributes = True
        arbitrary_types_allowed = True
