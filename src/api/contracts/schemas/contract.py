from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from src.api.customers.schemas.customer import CustomerSummary
from src.api.services.schemas.service import ServiceSummary
from src.api.locations.schemas.location import LocationSummary


class ContractRead(BaseModel):
    """Contract with its customer, service and location display fields"""
    id: int
    contract_number: Optional[str] = None
    partner_uuid: str
    customer_id: int
    service_id: Optional[int] = None
    location_id: Optional[int] = None
    service_name: Optional[str] = None
    service_type: Optional[str] = None
    service_cost: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    is_archived: bool
    archived_at: Optional[datetime] = None
    archived_by_user_id: Optional[str] = None
    archive_reason: Optional[str] = None

    created_at: datetime
    updated_at: datetime

    customer: Optional[CustomerSummary] = None
    service: Optional[ServiceSummary] = None
    location: Optional[LocationSummary] = None

    model_config = ConfigDict(from_attributes=True)
