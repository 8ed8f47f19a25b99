"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from src.domain.invoice_document import InvoiceDocument


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF generation capabilities for invoices.
    """

    @abstractmethod
    def generate_invoice(self, document: InvoiceDocument) -> bytes:
        """
        Generate an invoice PDF

        Args:
            document: Resolved invoice, patient, services and clinic info

        Returns:
            PDF document as bytes
        """
        pass
