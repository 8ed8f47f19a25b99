"""Invoice Document

Resolved invoice bundle handed to the PDF renderer.
"""

from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.invoice import Invoice, InvoiceItem
from src.domain.invoice_totals import InvoiceTotals
from src.domain.patient import Patient
from src.domain.service import Service


class ClinicInfo(BaseModel):
    """Clinic letterhead printed on invoices"""

    name: str
    address: str
    phone: str
    email: Optional[str] = None
    consultant: Optional[str] = None
    department: Optional[str] = None
    logo: Optional[str] = Field(
        default=None,
        description="Path to a logo image"
    )


class InvoiceDocument(BaseModel):
    """
    Invoice Document - Everything needed to print an invoice

    patient and services always resolve; dangling references are replaced
    by placeholders and flagged through patient_found / missing_service_ids.
    """

    invoice: Invoice
    patient: Patient
    services: List[Service]
    clinic_info: ClinicInfo
    totals: InvoiceTotals
    patient_found: bool = True
    missing_service_ids: List[str] = Field(default_factory=list)

    def service_for(self, item: InvoiceItem) -> Service:
        return next(s for s in self.services if s.id == item.service_id)
