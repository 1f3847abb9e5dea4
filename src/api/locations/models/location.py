from typing import Optional
from sqlmodel import Field
from src.api.common.models.base import BaseModel, TimestampMixin


class Location(BaseModel, TimestampMixin, table=True):
    """A coworking location operated by a partner"""
    id: Optional[int] = Field(default=None, primary_key=True)
    partner_uuid: str = Field(index=True)
    location_name: str
