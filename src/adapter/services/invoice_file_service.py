"""Local Invoice File Service Implementation

Stores generated invoice PDFs on the local filesystem.
"""

import logging
import shutil
import time
from pathlib import Path
from typing import Union
from src.app.services.invoice_file_service import InvoiceFileService
from src.domain.invoice import Invoice

logger = logging.getLogger(__name__)


class LocalInvoiceFileService(InvoiceFileService):
    """
    Filesystem implementation of InvoiceFileService

    Files are named invoice_<last 8 id chars>_<epoch millis>.pdf so that
    regenerating an invoice never overwrites an earlier copy.
    """

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def save_pdf(self, invoice: Invoice, pdf_bytes: bytes) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = int(time.time() * 1000)
        path = self.output_dir / f"invoice_{invoice.id[-8:]}_{timestamp}.pdf"
        path.write_bytes(pdf_bytes)

        logger.debug(f"Wrote {len(pdf_bytes)} bytes to {path}")
        return path

    def export(self, artifact: Path, destination: Path) -> Path:
        if not artifact.is_file():
            raise FileNotFoundError(str(artifact))

        destination.mkdir(parents=True, exist_ok=True)
        exported = Path(shutil.copy2(artifact, destination / artifact.name))

        logger.info(f"Exported {artifact.name} to {destination}")
        return exported
