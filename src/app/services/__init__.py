from .key_value_store import KeyValueStore
from .pdf_service import PdfService
from .invoice_file_service import InvoiceFileService

__all__ = [
    "KeyValueStore",
    "PdfService",
    "InvoiceFileService",
]
