"""Billing Store

Owns the in-memory patients, services and invoices and keeps the durable
copy in step with them.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional
from libs.result import Result, Return, Error
from src.app.repositories.billing_data_repository import BillingDataRepository
from src.domain.base import generate_uuid, local_now
from src.domain.billing_snapshot import BillingSnapshot
from src.domain.invoice import Invoice, InvoiceItem, InvoiceStatus
from src.domain.patient import Patient
from src.domain.service import Service
from src.domain.invoice_totals import InvoiceTotals, Number, calculate_invoice_total
from .dtos import (
    CreatePatientCommandDTO,
    UpdatePatientCommandDTO,
    CreateServiceCommandDTO,
    UpdateServiceCommandDTO,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    DashboardStatsDTO,
)

logger = logging.getLogger(__name__)

UNKNOWN_PATIENT_NAME = "Unknown"
UNKNOWN_SERVICE_NAME = "Unknown Service"

TOTAL_FIELDS = {"items", "discount", "tax_rate"}


def _changes(command) -> Dict:
    """Fields explicitly set on a partial update command"""
    return {name: getattr(command, name) for name in command.model_fields_set}


class BillingStore:
    """
    In-memory billing state with persist-after-mutate

    Business Rules:
    1. Every mutation is followed by a full save before it returns
    2. If the save fails, the in-memory change is rolled back and the
       save error is returned (memory and storage never diverge)
    3. Update/delete/mark-paid of an unknown id returns a *_NOT_FOUND error
       and touches neither memory nor storage
    4. Nothing is saved until load() has succeeded once, so a failed
       load can never overwrite stored data with empty collections
    5. No business-rule validation: command DTOs are validated by the caller
    6. References from invoices to patients/services are weak; lookups of
       dangling ids return None, resolve_* return placeholders

    Mutations must be awaited one at a time by a single caller; the store
    does no locking.

    Usage:
        store = BillingStore(repository)
        await store.load()
        result = await store.add_patient(CreatePatientCommandDTO(...))
    """

    def __init__(
        self,
        repository: BillingDataRepository,
        clock: Callable[[], datetime] = local_now,
    ):
        """
        Initialize an empty store

        Args:
            repository: Persistence for the three collections
            clock: Source of local timestamps for created_at/issued_on/paid_on
        """
        self.repository = repository
        self.clock = clock
        self.loaded = False
        self.patients: List[Patient] = []
        self.services: List[Service] = []
        self.invoices: List[Invoice] = []

    # Persistence

    def snapshot(self) -> BillingSnapshot:
        """Shallow copy of the current collections"""
        return BillingSnapshot(
            patients=list(self.patients),
            services=list(self.services),
            invoices=list(self.invoices),
        )

    def _restore(self, snapshot: BillingSnapshot) -> None:
        self.patients = list(snapshot.patients)
        self.services = list(snapshot.services)
        self.invoices = list(snapshot.invoices)

    async def load(self) -> Result[BillingSnapshot]:
        """
        Replace the in-memory collections with the stored ones

        On failure the current collections are kept unchanged.
        """
        result = await self.repository.load()

        if result.is_err():
            logger.error(f"Billing data not loaded: {result.error.message}")
            return result

        self._restore(result.value)
        self.loaded = True
        return result

    async def save(self) -> Result[None]:
        """
        Persist the current collections

        Returns LOAD_REQUIRED while no load has succeeded.
        """
        if not self.loaded:
            return Return.err(
                Error(
                    code="LOAD_REQUIRED",
                    message="Billing data must be loaded before it can be saved",
                    reason="No successful load yet; saving would overwrite stored data",
                )
            )

        return await self.repository.save(self.snapshot())

    async def _commit(self, previous: BillingSnapshot) -> Result[None]:
        result = await self.save()

        if result.is_err():
            logger.error(
                f"Rolling back in-memory change, save failed: {result.error.message}"
            )
            self._restore(previous)

        return result

    # Patients

    async def add_patient(self, data: CreatePatientCommandDTO) -> Result[Patient]:
        """
        Register a patient

        Args:
            data: Patient fields (id and created_at are assigned here)

        Returns:
            Result[Patient]: created record, or SAVE_FAILED error
        """
        previous = self.snapshot()
        patient = Patient(
            **data.model_dump(),
            id=generate_uuid(),
            created_at=self.clock(),
        )
        self.patients.append(patient)

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        logger.info(f"Added patient {patient.id}")
        return Return.ok(patient)

    async def update_patient(
        self, patient_id: str, data: UpdatePatientCommandDTO
    ) -> Result[Patient]:
        """
        Merge the fields set on data into a patient

        Returns:
            Result[Patient]: updated record, PATIENT_NOT_FOUND or SAVE_FAILED
        """
        index = self._index_of(self.patients, patient_id)
        if index is None:
            return self._not_found("PATIENT_NOT_FOUND", "Patient", patient_id)

        previous = self.snapshot()
        patient = self.patients[index].model_copy(update=_changes(data))
        self.patients[index] = patient

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        return Return.ok(patient)

    async def delete_patient(self, patient_id: str) -> Result[Patient]:
        """
        Remove a patient

        Invoices referencing the patient are kept and will resolve to the
        "Unknown" placeholder.

        Returns:
            Result[Patient]: removed record, PATIENT_NOT_FOUND or SAVE_FAILED
        """
        index = self._index_of(self.patients, patient_id)
        if index is None:
            return self._not_found("PATIENT_NOT_FOUND", "Patient", patient_id)

        previous = self.snapshot()
        patient = self.patients.pop(index)

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        orphaned = len(self.get_invoices_for_patient(patient_id))
        if orphaned:
            logger.warning(
                f"Deleted patient {patient_id} still referenced by {orphaned} invoices"
            )
        return Return.ok(patient)

    def search_patients(self, query: str) -> List[Patient]:
        """
        Case-insensitive match on name, or raw substring match on phone

        A blank query returns every patient in insertion order.
        """
        if not query.strip():
            return list(self.patients)

        lowercase_query = query.lower()
        return [
            p for p in self.patients
            if lowercase_query in p.name.lower() or query in p.phone
        ]

    def get_patient_by_id(self, patient_id: str) -> Optional[Patient]:
        return next((p for p in self.patients if p.id == patient_id), None)

    def resolve_patient(self, patient_id: str) -> Patient:
        """Patient for display; a dangling id yields an "Unknown" placeholder"""
        patient = self.get_patient_by_id(patient_id)
        if patient:
            return patient
        return Patient(
            id=patient_id,
            name=UNKNOWN_PATIENT_NAME,
            phone="",
            age=0,
            created_at=datetime.min,
        )

    # Services

    async def add_service(self, data: CreateServiceCommandDTO) -> Result[Service]:
        """
        Add a billable service

        Returns:
            Result[Service]: created record, or SAVE_FAILED error
        """
        previous = self.snapshot()
        service = Service(**data.model_dump(), id=generate_uuid())
        self.services.append(service)

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        logger.info(f"Added service {service.id}")
        return Return.ok(service)

    async def update_service(
        self, service_id: str, data: UpdateServiceCommandDTO
    ) -> Result[Service]:
        """
        Merge the fields set on data into a service

        Existing invoices keep their captured unit prices.
        """
        index = self._index_of(self.services, service_id)
        if index is None:
            return self._not_found("SERVICE_NOT_FOUND", "Service", service_id)

        previous = self.snapshot()
        service = self.services[index].model_copy(update=_changes(data))
        self.services[index] = service

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        return Return.ok(service)

    async def delete_service(self, service_id: str) -> Result[Service]:
        """Remove a service; invoice items referencing it are kept"""
        index = self._index_of(self.services, service_id)
        if index is None:
            return self._not_found("SERVICE_NOT_FOUND", "Service", service_id)

        previous = self.snapshot()
        service = self.services.pop(index)

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        orphaned = sum(
            1 for i in self.invoices
            if any(item.service_id == service_id for item in i.items)
        )
        if orphaned:
            logger.warning(
                f"Deleted service {service_id} still referenced by {orphaned} invoices"
            )
        return Return.ok(service)

    def search_services(self, query: str) -> List[Service]:
        """Case-insensitive match on name; a blank query returns everything"""
        if not query.strip():
            return list(self.services)

        lowercase_query = query.lower()
        return [s for s in self.services if lowercase_query in s.name.lower()]

    def get_service_by_id(self, service_id: str) -> Optional[Service]:
        return next((s for s in self.services if s.id == service_id), None)

    def resolve_service(self, item: InvoiceItem) -> Service:
        """Service for an invoice line; a dangling id yields a placeholder"""
        service = self.get_service_by_id(item.service_id)
        if service:
            return service
        return Service(
            id=item.service_id,
            name=UNKNOWN_SERVICE_NAME,
            price=item.unit_price,
        )

    # Invoices

    def calculate_invoice_total(
        self, items: List[InvoiceItem], discount: Number, tax_rate: Number
    ) -> InvoiceTotals:
        return calculate_invoice_total(items, discount, tax_rate)

    async def create_invoice(self, data: CreateInvoiceCommandDTO) -> Result[str]:
        """
        Create an invoice with frozen subtotal/total

        Args:
            data: Invoice fields (id, issued_on, subtotal, total are assigned)

        Returns:
            Result[str]: new invoice id, or SAVE_FAILED error
        """
        totals = calculate_invoice_total(data.items, data.discount, data.tax_rate)

        previous = self.snapshot()
        invoice = Invoice(
            id=generate_uuid(),
            patient_id=data.patient_id,
            items=list(data.items),
            discount=data.discount,
            tax_rate=data.tax_rate,
            subtotal=totals.subtotal,
            total=totals.total,
            status=data.status,
            issued_on=self.clock(),
            paid_on=data.paid_on,
            notes=data.notes,
        )
        self.invoices.append(invoice)

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        logger.info(
            f"Created invoice {invoice.id} for patient {invoice.patient_id}: "
            f"subtotal={invoice.subtotal}, total={invoice.total}"
        )
        return Return.ok(invoice.id)

    async def update_invoice(
        self, invoice_id: str, data: UpdateInvoiceCommandDTO
    ) -> Result[Invoice]:
        """
        Merge the fields set on data into an invoice

        subtotal and total are recomputed when items, discount or tax_rate
        change; otherwise the stored snapshots are kept.
        """
        index = self._index_of(self.invoices, invoice_id)
        if index is None:
            return self._not_found("INVOICE_NOT_FOUND", "Invoice", invoice_id)

        changes = _changes(data)
        invoice = self.invoices[index].model_copy(update=changes)

        if TOTAL_FIELDS & changes.keys():
            totals = calculate_invoice_total(
                invoice.items, invoice.discount, invoice.tax_rate
            )
            invoice = invoice.model_copy(
                update={"subtotal": totals.subtotal, "total": totals.total}
            )

        previous = self.snapshot()
        self.invoices[index] = invoice

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        return Return.ok(invoice)

    async def delete_invoice(self, invoice_id: str) -> Result[Invoice]:
        index = self._index_of(self.invoices, invoice_id)
        if index is None:
            return self._not_found("INVOICE_NOT_FOUND", "Invoice", invoice_id)

        previous = self.snapshot()
        invoice = self.invoices.pop(index)

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        return Return.ok(invoice)

    async def mark_invoice_paid(self, invoice_id: str) -> Result[Invoice]:
        """
        Set status to paid and stamp paid_on with the current time

        Marking an already paid invoice re-stamps paid_on. Totals are not
        recomputed.
        """
        index = self._index_of(self.invoices, invoice_id)
        if index is None:
            return self._not_found("INVOICE_NOT_FOUND", "Invoice", invoice_id)

        previous = self.snapshot()
        invoice = self.invoices[index].model_copy(
            update={"status": InvoiceStatus.PAID, "paid_on": self.clock()}
        )
        self.invoices[index] = invoice

        saved = await self._commit(previous)
        if saved.is_err():
            return saved

        logger.info(f"Invoice {invoice_id} marked paid")
        return Return.ok(invoice)

    def get_invoice_by_id(self, invoice_id: str) -> Optional[Invoice]:
        return next((i for i in self.invoices if i.id == invoice_id), None)

    def get_invoices_for_patient(self, patient_id: str) -> List[Invoice]:
        return [i for i in self.invoices if i.patient_id == patient_id]

    def get_recent_invoices(self, limit: int = 5) -> List[Invoice]:
        """Newest invoices first by issue time"""
        ordered = sorted(self.invoices, key=lambda i: i.issued_on, reverse=True)
        return ordered[:limit]

    # Aggregation

    def get_dashboard_stats(self) -> DashboardStatsDTO:
        """
        Revenue (paid), outstanding (unpaid) and collection sizes

        Recomputed on every call.
        """
        total_revenue = sum(
            (i.total for i in self.invoices if i.status == InvoiceStatus.PAID),
            Decimal("0"),
        )
        outstanding_amount = sum(
            (i.total for i in self.invoices if i.status == InvoiceStatus.UNPAID),
            Decimal("0"),
        )

        return DashboardStatsDTO(
            total_revenue=total_revenue,
            outstanding_amount=outstanding_amount,
            total_patients=len(self.patients),
            total_invoices=len(self.invoices),
        )

    # Helpers

    @staticmethod
    def _index_of(records: List, record_id: str) -> Optional[int]:
        return next(
            (index for index, record in enumerate(records) if record.id == record_id),
            None,
        )

    @staticmethod
    def _not_found(code: str, entity: str, record_id: str) -> Result:
        logger.warning(f"{entity} {record_id} not found")
        return Return.err(
            Error(
                code=code,
                message=f"{entity} with ID {record_id} not found",
                reason=f"{entity} does not exist",
            )
        )
