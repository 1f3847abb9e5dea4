from typing import TYPE_CHECKING, List, Optional
from datetime import date
from sqlmodel import Field, Relationship
from src.api.common.models.base import BaseModel, TimestampMixin, ArchiveMixin
from src.api.customers.models.customer import Customer
from src.api.services.models.service import Service
from src.api.locations.models.location import Location

if TYPE_CHECKING:
    from src.api.contracts.models.booking import Booking
    from src.api.contracts.models.package_reservation import PackageReservation


class Contract(BaseModel, TimestampMixin, ArchiveMixin, table=True):
    """
    Contract between a partner and one of its customers for a service.

    Root of the archive aggregate: bookings and package reservations follow
    the contract when it is archived, restored or purged.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    contract_number: Optional[str] = Field(default=None, index=True)

    partner_uuid: str = Field(index=True)

    # Customer relationship
    customer_id: int = Field(foreign_key="customer.id", index=True)
    customer: Optional[Customer] = Relationship()

    # Service relationship, with the service details copied at signing time
    service_id: Optional[int] = Field(default=None, foreign_key="service.id")
    service: Optional[Service] = Relationship()
    service_name: Optional[str] = None
    service_type: Optional[str] = Field(default=None, index=True)
    service_cost: Optional[float] = 0.0

    location_id: Optional[int] = Field(default=None, foreign_key="location.id")
    location: Optional[Location] = Relationship()

    start_date: Optional[date] = None
    end_date: Optional[date] = None

    # Dependents
    bookings: List["Booking"] = Relationship(back_populates="contract")
    package_reservations: List["PackageReservation"] = Relationship(
        back_populates="contract")

    class Config:
        from_attributes = True
        arbitrary_types_allowed = True
