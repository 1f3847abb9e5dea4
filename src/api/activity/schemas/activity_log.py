from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class ActivityLogRead(BaseModel):
    """Schema for reading activity entries"""
    id: int
    partner_uuid: Optional[str] = None
    user_id: Optional[str] = None
    action_category: str
    action_type: str
    entity_id: Optional[str] = None
    entity_type: Optional[str] = None
    description: str
    details: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
