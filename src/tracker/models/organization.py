"""Organization model - the tenant boundary."""

from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from src.tracker.models.base import new_id, utc_now


class Organization(SQLModel, table=True):
    """Tenant registry. Every other row carries an org_id pointing here."""

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    name: str = Field(max_length=100, index=True)
    slug: str = Field(max_length=60, unique=True, index=True)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)

    @property
    def is_deleted(self) -> bool:
        """Check if organization is soft-deleted."""
        return self.deleted_at is not None
