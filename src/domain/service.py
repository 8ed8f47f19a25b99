"""Service Domain Entity

A billable offering with a list price.
"""

from decimal import Decimal
from typing import Optional
from pydantic import Field
from src.domain.base import EntityModel, generate_uuid


class Service(EntityModel):
    """
    Service - Billable treatment or consultation

    Domain Rules:
    - price is the current list price; invoices capture their own unit price
    - Editing price never changes existing invoices
    """

    id: str = Field(
        default_factory=generate_uuid,
        description="Opaque unique service identifier"
    )

    name: str = Field(
        description="Service name shown on invoices"
    )

    price: Decimal = Field(
        description="Current list price"
    )

    description: Optional[str] = Field(
        default=None,
        description="Optional longer description"
    )
