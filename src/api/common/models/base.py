from datetime import datetime
from typing import Optional
from sqlmodel import Field, SQLModel, DateTime
from sqlalchemy.ext.declarative import declared_attr
from src.api.common.utils.datetime import get_current_datetime


class TimestampMixin:
    """Mixin to add created_at and updated_at fields to models"""
    created_at: datetime = Field(
        default_factory=get_current_datetime,
        sa_type=DateTime(timezone=True), nullable=False)
    updated_at: datetime = Field(
        default_factory=get_current_datetime,
        sa_type=DateTime(timezone=True), nullable=False)


class ArchiveMixin:
    """
    Mixin with the soft-delete tuple shared by contracts and their dependents.

    The four fields are always written together: either all cleared
    (is_archived False, the rest None) or all set.
    """
    is_archived: bool = Field(default=False, index=True, nullable=False)
    archived_at: Optional[datetime] = Field(
        default=None, sa_type=DateTime(timezone=True), index=True)
    archived_by_user_id: Optional[str] = Field(default=None)
    archive_reason: Optional[str] = Field(default=None)


class BaseModel(SQLModel):
    """Base model for all models in the application"""
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()
