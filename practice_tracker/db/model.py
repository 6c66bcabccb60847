import uuid
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel, table=False):
    """Abstract base model for database entities with common fields."""

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        description="Unique identifier of the entity.",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="Timestamp when the entity was created.",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Timestamp when the entity was last updated.",
    )
