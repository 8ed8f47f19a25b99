"""Unit tests for ResolveInvoice use case"""

import pytest
from decimal import Decimal

from src.app.use_cases.billing.dtos import CreateInvoiceCommandDTO
from src.app.use_cases.billing.resolve_invoice import ResolveInvoice
from src.domain.invoice import InvoiceItem


@pytest.mark.asyncio
class TestResolveInvoice:
    """Test invoice bundle resolution"""

    async def test_resolves_patient_and_services(
        self, store, patient_command, service_command, clinic_info
    ):
        # Arrange
        patient = (await store.add_patient(patient_command)).value
        service = (await store.add_service(service_command)).value
        invoice_id = (
            await store.create_invoice(
                CreateInvoiceCommandDTO(
                    patient_id=patient.id,
                    items=[
                        InvoiceItem.from_service(service, quantity=2),
                        InvoiceItem.from_service(service, quantity=1),
                    ],
                    discount=Decimal("10"),
                )
            )
        ).value
        use_case = ResolveInvoice(store)

        # Act
        result = await use_case.execute(invoice_id, clinic_info)

        # Assert
        assert result.is_ok()
        document = result.value
        assert document.patient == patient
        assert document.patient_found is True
        assert document.services == [service]
        assert document.missing_service_ids == []
        assert document.clinic_info == clinic_info
        assert document.totals.subtotal == Decimal("1500.00")
        assert document.totals.discount_amount == Decimal("150.00")

    async def test_dangling_references_resolve_to_placeholders(
        self, store, make_item, clinic_info
    ):
        """
        Given: An invoice whose patient and service were never stored
        When: The invoice is resolved
        Then: "Unknown" patient and "Unknown Service" at the captured price
        """
        # Arrange
        invoice_id = (
            await store.create_invoice(
                CreateInvoiceCommandDTO(
                    patient_id="gone",
                    items=[make_item("svc_gone", quantity=3, unit_price="75.50")],
                )
            )
        ).value

        # Act
        result = await ResolveInvoice(store).execute(invoice_id, clinic_info)

        # Assert
        document = result.value
        assert document.patient.name == "Unknown"
        assert document.patient.id == "gone"
        assert document.patient_found is False
        assert document.missing_service_ids == ["svc_gone"]
        placeholder = document.service_for(document.invoice.items[0])
        assert placeholder.name == "Unknown Service"
        assert placeholder.price == Decimal("75.50")

    async def test_unknown_invoice(self, store, clinic_info):
        result = await ResolveInvoice(store).execute("missing", clinic_info)

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
