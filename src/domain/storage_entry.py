"""Storage Entry Domain Entity

One row per key of the local key-value store.
"""

from datetime import datetime, timezone
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StorageEntry(BaseModel, table=True):
    """
    Storage Entry - Named text blob

    Domain Rules:
    - key is unique (primary key)
    - value holds a serialized JSON document
    - Writes replace the whole value
    """

    __tablename__ = "storage_entries"

    key: str = Field(
        sa_column=Column(String(100), primary_key=True),
        description="Storage key (e.g., physio_patients)"
    )

    value: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Serialized blob"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last write timestamp"
    )
