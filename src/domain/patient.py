"""Patient Domain Entity

A person receiving treatment and being billed.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field
from src.domain.base import EntityModel, generate_uuid, local_now


class Patient(EntityModel):
    """
    Patient - Billable person

    Domain Rules:
    - id is generated on creation and never reassigned
    - created_at is stamped on creation
    - Deleting a patient never touches invoices that reference it
    """

    id: str = Field(
        default_factory=generate_uuid,
        description="Opaque unique patient identifier"
    )

    name: str = Field(
        description="Full name"
    )

    phone: str = Field(
        description="Contact phone number (free text)"
    )

    age: int = Field(
        description="Age in years"
    )

    sex: Optional[str] = Field(
        default=None,
        description="Optional free-text sex"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Optional clinical or billing notes"
    )

    created_at: datetime = Field(
        default_factory=local_now,
        alias="createdAt",
        description="Creation timestamp"
    )
