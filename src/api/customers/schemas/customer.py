from typing import Optional
from pydantic import BaseModel, ConfigDict


class CustomerSummary(BaseModel):
    """Customer display fields joined onto contract reads"""
    id: int
    first_name: Optional[str] = None
    second_name: Optional[str] = None
    email: Optional[str] = None
    company_name: Optional[str] = None
    display_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
