"""GenerateInvoicePdf Use Case

Renders an invoice to PDF and stores the file.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.invoice_file_service import InvoiceFileService
from src.app.services.pdf_service import PdfService
from src.domain.base import local_now
from src.domain.invoice_document import ClinicInfo
from .dtos import InvoicePdfResponseDTO
from .resolve_invoice import ResolveInvoice

logger = logging.getLogger(__name__)


class GenerateInvoicePdf:
    """
    Use Case: Generate a printable invoice

    Business Rules:
    1. Invoice must exist
    2. Dangling patient/service references print as placeholders
    3. Paid and unpaid invoices can both be printed

    Flow:
    1. Resolve invoice, patient and services
    2. Render PDF using PDF service
    3. Store PDF using file service
    4. Return location of the artifact
    """

    def __init__(
        self,
        resolve_invoice: ResolveInvoice,
        pdf_service: PdfService,
        file_service: InvoiceFileService,
        clinic_info: ClinicInfo,
    ):
        self.resolve_invoice = resolve_invoice
        self.pdf_service = pdf_service
        self.file_service = file_service
        self.clinic_info = clinic_info

    async def execute(self, invoice_id: str) -> Result[InvoicePdfResponseDTO]:
        """
        Execute invoice PDF generation

        Args:
            invoice_id: Invoice to print

        Returns:
            Result[InvoicePdfResponseDTO]: Success with file path or error
        """
        # Step 1: Resolve invoice bundle
        resolved = await self.resolve_invoice.execute(invoice_id, self.clinic_info)
        if resolved.is_err():
            return resolved

        document = resolved.value

        try:
            # Step 2: Render PDF
            pdf_bytes = self.pdf_service.generate_invoice(document)

            # Step 3: Store artifact
            path = self.file_service.save_pdf(document.invoice, pdf_bytes)

        except Exception as e:
            logger.error(f"Invoice PDF generation failed for {invoice_id}: {e}")
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )

        logger.info(f"Generated PDF for invoice {invoice_id} at {path}")

        # Step 4: Build response
        return Return.ok(
            InvoicePdfResponseDTO(
                invoice_id=document.invoice.id,
                display_number=document.invoice.display_number,
                file_path=str(path),
                generated_at=local_now(),
            )
        )
