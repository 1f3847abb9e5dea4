from typing import Optional
from sqlmodel import Field
from src.api.common.models.base import BaseModel, TimestampMixin


class Service(BaseModel, TimestampMixin, table=True):
    """
    Service a partner sells (subscription, entry package or free trial)
    """
    id: Optional[int] = Field(default=None, primary_key=True)

    partner_uuid: str = Field(index=True)

    service_name: str
    # Free text in the store; see ServiceType for the known values
    service_type: Optional[str] = Field(default=None, index=True)

    class Config:
        from_attributes = True
        arbitrary_types_allowed = True
