"""Invoice File Service Interface

Defines the contract for storing and exporting generated invoice PDFs.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from src.domain.invoice import Invoice


class InvoiceFileService(ABC):
    """
    Service interface for invoice PDF artifacts

    save_pdf produces the artifact, export hands it to the outside world
    (the share action).
    """

    @abstractmethod
    def save_pdf(self, invoice: Invoice, pdf_bytes: bytes) -> Path:
        """
        Store a generated PDF

        Args:
            invoice: Invoice the PDF was generated for
            pdf_bytes: PDF document

        Returns:
            Path of the stored artifact
        """
        pass

    @abstractmethod
    def export(self, artifact: Path, destination: Path) -> Path:
        """
        Export a stored artifact

        Args:
            artifact: Path returned by save_pdf
            destination: Target directory

        Returns:
            Path of the exported copy

        Raises:
            FileNotFoundError: artifact does not exist
        """
        pass
