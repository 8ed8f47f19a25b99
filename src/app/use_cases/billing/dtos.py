"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from src.domain.invoice import Invoice, InvoiceItem, InvoiceStatus


class CreatePatientCommandDTO(BaseModel):
    """
    Command DTO for registering a patient

    Used as input to BillingStore.add_patient.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Full name"
    )

    phone: str = Field(
        ...,
        min_length=1,
        description="Contact phone number"
    )

    age: int = Field(
        ...,
        gt=0,
        description="Age in years (must be > 0)"
    )

    sex: Optional[str] = Field(
        default=None,
        description="Optional free-text sex"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Optional notes"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "John Smith",
                "phone": "9876543210",
                "age": 42,
                "sex": "M",
                "notes": "Lower back pain"
            }
        }


class UpdatePatientCommandDTO(BaseModel):
    """
    Command DTO for a partial patient update

    Only fields explicitly set are merged into the stored record.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = Field(default=None, min_length=1)
    age: Optional[int] = Field(default=None, gt=0)
    sex: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name", "phone", "age")
    @classmethod
    def reject_null(cls, v):
        """Required patient fields may be omitted but never cleared"""
        if v is None:
            raise ValueError("Field cannot be cleared")
        return v


class CreateServiceCommandDTO(BaseModel):
    """
    Command DTO for adding a billable service

    Used as input to BillingStore.add_service.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Service name"
    )

    price: Decimal = Field(
        ...,
        ge=0,
        description="List price (must be >= 0)"
    )

    description: Optional[str] = Field(
        default=None,
        description="Optional description"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Ultrasound Therapy",
                "price": "500.00",
                "description": "20 minute session"
            }
        }


class UpdateServiceCommandDTO(BaseModel):
    """Command DTO for a partial service update"""

    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0)
    description: Optional[str] = None

    @field_validator("name", "price")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be cleared")
        return v


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    id, issued_on, subtotal and total are assigned by the store.
    discount and tax_rate are percentages and are not clamped.
    """

    patient_id: str = Field(
        ...,
        description="Patient being billed"
    )

    items: List[InvoiceItem] = Field(
        ...,
        description="Line items with captured unit prices"
    )

    discount: Decimal = Field(
        default=Decimal("0"),
        description="Discount percentage"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        description="Tax percentage applied after discount"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.UNPAID,
        description="Initial payment status"
    )

    paid_on: Optional[datetime] = Field(
        default=None,
        description="Payment timestamp when created as paid"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Optional notes"
    )


class UpdateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for a partial invoice update

    Changing items, discount or tax_rate recomputes subtotal and total.
    status and paid_on are not updatable: mark_invoice_paid is the only
    status transition.
    """

    patient_id: Optional[str] = None
    items: Optional[List[InvoiceItem]] = None
    discount: Optional[Decimal] = None
    tax_rate: Optional[Decimal] = None
    notes: Optional[str] = None

    @field_validator("patient_id", "items", "discount", "tax_rate")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be cleared")
        return v

    class Config:
        extra = "forbid"


class DashboardStatsDTO(BaseModel):
    """
    Response DTO for dashboard aggregation

    Recomputed from the in-memory collections on every call.
    """

    total_revenue: Decimal = Field(
        ...,
        description="Sum of totals of paid invoices"
    )

    outstanding_amount: Decimal = Field(
        ...,
        description="Sum of totals of unpaid invoices"
    )

    total_patients: int = Field(
        ...,
        description="Number of patients"
    )

    total_invoices: int = Field(
        ...,
        description="Number of invoices"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "total_revenue": "12500.00",
                "outstanding_amount": "3400.00",
                "total_patients": 48,
                "total_invoices": 112
            }
        }


class InvoicePdfResponseDTO(BaseModel):
    """Response DTO for invoice PDF generation"""

    invoice_id: str = Field(..., description="Invoice identifier")
    display_number: str = Field(..., description="Printed invoice number")
    file_path: str = Field(..., description="Location of the generated PDF")
    generated_at: datetime = Field(..., description="Generation timestamp")


class InvoiceExportResponseDTO(BaseModel):
    """Response DTO for exporting (sharing) a generated PDF"""

    source_path: str
    exported_path: str
    exported_at: datetime


class PeriodReportDTO(BaseModel):
    """
    Response DTO for the revenue report of a period

    invoices are ordered newest first.
    """

    period: str = Field(..., description="Report period (today, week, month)")
    start_date: datetime = Field(..., description="Inclusive period start")
    status_filter: Optional[InvoiceStatus] = Field(
        default=None,
        description="Status filter applied to the invoice list"
    )
    invoice_count: int
    paid_count: int
    unpaid_count: int
    revenue: Decimal = Field(..., description="Sum of paid totals in period")
    outstanding: Decimal = Field(..., description="Sum of unpaid totals in period")
    invoices: List[Invoice] = Field(default_factory=list)
