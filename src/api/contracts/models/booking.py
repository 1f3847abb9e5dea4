from typing import TYPE_CHECKING, Optional
from datetime import date
from sqlmodel import Field, Relationship
from src.api.common.models.base import BaseModel, TimestampMixin, ArchiveMixin

if TYPE_CHECKING:
    from src.api.contracts.models.contract import Contract


class Booking(BaseModel, TimestampMixin, ArchiveMixin, table=True):
    """
    Resource booking generated by a subscription contract
    """
    id: Optional[int] = Field(default=None, primary_key=True)

    contract_id: int = Field(foreign_key="contract.id", index=True)
    contract: Optional["Contract"] = Relationship(back_populates="bookings")

    partner_uuid: Optional[str] = Field(default=None, index=True)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    class Config:
        from_attributes = True
