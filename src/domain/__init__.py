from .base import BaseModel, EntityModel, generate_uuid
from .patient import Patient
from .service import Service
from .invoice import Invoice, InvoiceItem, InvoiceStatus
from .invoice_totals import InvoiceTotals, calculate_invoice_total
from .invoice_document import ClinicInfo, InvoiceDocument
from .storage_entry import StorageEntry
from .billing_snapshot import BillingSnapshot

__all__ = [
    "BaseModel",
    "EntityModel",
    "generate_uuid",
    "Patient",
    "Service",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "InvoiceTotals",
    "calculate_invoice_total",
    "ClinicInfo",
    "InvoiceDocument",
    "StorageEntry",
    "BillingSnapshot",
]
