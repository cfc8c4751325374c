"""Repository for Organization entity."""

from src.tracker.models import Organization
from src.tracker.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    """Repository for the tenant registry. Lookups go through get_by_id."""

    model = Organization
