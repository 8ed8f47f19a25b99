"""ExportInvoicePdf Use Case

Shares a generated invoice PDF by copying it to a destination directory.
"""

import logging
from pathlib import Path
from typing import Union
from libs.result import Result, Return, Error
from src.app.services.invoice_file_service import InvoiceFileService
from src.domain.base import local_now
from .dtos import InvoiceExportResponseDTO

logger = logging.getLogger(__name__)


class ExportInvoicePdf:
    """
    Use Case: Export a generated invoice PDF

    Business Rules:
    1. The artifact must exist
    2. The original artifact is left in place
    """

    def __init__(self, file_service: InvoiceFileService):
        self.file_service = file_service

    async def execute(
        self, artifact: Union[str, Path], destination: Union[str, Path]
    ) -> Result[InvoiceExportResponseDTO]:
        """
        Execute export

        Args:
            artifact: Path returned by GenerateInvoicePdf
            destination: Target directory

        Returns:
            Result[InvoiceExportResponseDTO]: Success with exported path,
            FILE_NOT_FOUND or EXPORT_FAILED
        """
        try:
            exported = self.file_service.export(Path(artifact), Path(destination))

        except FileNotFoundError:
            return Return.err(
                Error(
                    code="FILE_NOT_FOUND",
                    message=f"Invoice file {artifact} not found",
                    reason="Generate the invoice PDF before exporting it",
                )
            )

        except Exception as e:
            logger.error(f"Export of {artifact} failed: {e}")
            return Return.err(
                Error(
                    code="EXPORT_FAILED",
                    message="Failed to export invoice PDF",
                    reason=str(e),
                )
            )

        return Return.ok(
            InvoiceExportResponseDTO(
                source_path=str(artifact),
                exported_path=str(exported),
                exported_at=local_now(),
            )
        )
