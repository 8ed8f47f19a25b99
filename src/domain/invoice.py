"""Invoice Domain Entity

Billing document for one patient with embedded line items.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import Field
from src.domain.base import EntityModel, generate_uuid, local_now
from src.domain.service import Service


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    UNPAID = "unpaid"
    PAID = "paid"


class InvoiceItem(EntityModel):
    """
    Invoice Item - One line of an invoice

    Domain Rules:
    - service_id is a weak reference; the service may no longer exist
    - unit_price is captured when the item is created
    """

    id: str = Field(
        default_factory=generate_uuid,
        description="Line item identifier"
    )

    service_id: str = Field(
        alias="serviceId",
        description="Referenced service id"
    )

    quantity: int = Field(
        description="Number of units"
    )

    unit_price: Decimal = Field(
        alias="unitPrice",
        description="Price per unit at time of invoicing"
    )

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price

    @classmethod
    def from_service(cls, service: Service, quantity: int = 1) -> "InvoiceItem":
        """Build a line item capturing the service's current price"""
        return cls(service_id=service.id, quantity=quantity, unit_price=service.price)


class Invoice(EntityModel):
    """
    Invoice - Billing document for a patient

    Domain Rules:
    - subtotal = sum(quantity * unit_price), frozen at creation/update time
    - total = (subtotal - subtotal * discount / 100) * (1 + tax_rate / 100)
    - patient_id is a weak reference; the patient may no longer exist
    - Status transitions: unpaid -> paid (paid_on is stamped)
    """

    id: str = Field(
        default_factory=generate_uuid,
        description="Opaque unique invoice identifier"
    )

    patient_id: str = Field(
        alias="patientId",
        description="Referenced patient id"
    )

    items: List[InvoiceItem] = Field(
        default_factory=list,
        description="Line items in insertion order"
    )

    discount: Decimal = Field(
        default=Decimal("0"),
        description="Discount percentage (not clamped)"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        alias="taxRate",
        description="Tax percentage applied after discount (not clamped)"
    )

    subtotal: Decimal = Field(
        description="Snapshot of the sum of line totals"
    )

    total: Decimal = Field(
        description="Snapshot of the amount due"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.UNPAID,
        description="Payment status (unpaid, paid)"
    )

    issued_on: datetime = Field(
        default_factory=local_now,
        alias="issuedOn",
        description="Issue timestamp"
    )

    paid_on: Optional[datetime] = Field(
        default=None,
        alias="paidOn",
        description="Timestamp of the last transition to paid"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Optional notes printed on the invoice"
    )

    @property
    def display_number(self) -> str:
        """Short human-facing invoice number"""
        return self.id[-8:].upper()

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID
