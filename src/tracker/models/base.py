from datetime import UTC, datetime
from uuid import UUID, uuid4


def utc_now() -> datetime:
    """Return current UTC time as naive datetime (for TIMESTAMP WITHOUT TIME ZONE).

    All times are stored in UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def new_id() -> UUID:
    """Generate a primary key for a new row."""
    return uuid4()
