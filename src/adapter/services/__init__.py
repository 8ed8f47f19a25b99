from .key_value_store import SqlAlchemyKeyValueStore, InMemoryKeyValueStore
from .pdf_service import ReportLabPdfService
from .invoice_file_service import LocalInvoiceFileService

__all__ = [
    "SqlAlchemyKeyValueStore",
    "InMemoryKeyValueStore",
    "ReportLabPdfService",
    "LocalInvoiceFileService",
]
