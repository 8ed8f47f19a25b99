"""ResolveInvoice Use Case

Builds the invoice bundle consumed by the PDF renderer.
"""

from typing import Dict
from libs.result import Result, Return, Error
from src.domain.invoice_document import ClinicInfo, InvoiceDocument
from src.domain.invoice_totals import calculate_invoice_total
from src.domain.service import Service
from .billing_store import BillingStore


class ResolveInvoice:
    """
    Use Case: Resolve an invoice with its patient and services

    Business Rules:
    1. Invoice must exist
    2. A deleted patient resolves to the "Unknown" placeholder
    3. A deleted service resolves to "Unknown Service" priced at the
       item's captured unit price
    4. Services are listed once each, in first-use order

    Flow:
    1. Look up invoice by ID
    2. Resolve patient and services
    3. Compute the discount/tax breakdown from the items
    4. Return document bundle
    """

    def __init__(self, store: BillingStore):
        self.store = store

    async def execute(
        self, invoice_id: str, clinic_info: ClinicInfo
    ) -> Result[InvoiceDocument]:
        """
        Execute invoice resolution

        Args:
            invoice_id: Invoice to resolve
            clinic_info: Letterhead to print

        Returns:
            Result[InvoiceDocument]: Success with bundle or INVOICE_NOT_FOUND
        """
        invoice = self.store.get_invoice_by_id(invoice_id)

        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                    reason="Invoice does not exist",
                )
            )

        patient_found = self.store.get_patient_by_id(invoice.patient_id) is not None
        patient = self.store.resolve_patient(invoice.patient_id)

        services: Dict[str, Service] = {}
        missing_service_ids = []
        for item in invoice.items:
            if item.service_id in services:
                continue
            if self.store.get_service_by_id(item.service_id) is None:
                missing_service_ids.append(item.service_id)
            services[item.service_id] = self.store.resolve_service(item)

        totals = calculate_invoice_total(
            invoice.items, invoice.discount, invoice.tax_rate
        )

        return Return.ok(
            InvoiceDocument(
                invoice=invoice,
                patient=patient,
                services=list(services.values()),
                clinic_info=clinic_info,
                totals=totals,
                patient_found=patient_found,
                missing_service_ids=missing_service_ids,
            )
        )
