from typing import Optional
from pydantic import BaseModel, ConfigDict


class ServiceSummary(BaseModel):
    """Service display fields joined onto contract reads"""
    id: int
    service_name: str
    service_type: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
