from typing import TYPE_CHECKING, Optional
from datetime import date
from sqlmodel import Field, Relationship
from src.api.common.models.base import BaseModel, TimestampMixin, ArchiveMixin

if TYPE_CHECKING:
    from src.api.contracts.models.contract import Contract


class PackageReservation(BaseModel, TimestampMixin, ArchiveMixin, table=True):
    """
    Single-day reservation consuming entries of a package contract
    """
    id: Optional[int] = Field(default=None, primary_key=True)

    contract_id: int = Field(foreign_key="contract.id", index=True)
    contract: Optional["Contract"] = Relationship(
        back_populates="package_reservations")

    partner_uuid: Optional[str] = Field(default=None, index=True)
    reservation_date: Optional[date] = None
    # morning, afternoon or full_day
    time_slot: Optional[str] = None
    entries_used: float = 1.0

    class Config:
        from_attributes = True
