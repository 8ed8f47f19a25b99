"""Unit tests for BillingStore invoice operations

Tests cover:
- create_invoice freezes subtotal/total and stamps issued_on
- update_invoice merge and total recomputation
- mark_invoice_paid stamping and re-stamping
- delete and not-found outcomes
"""

import pytest
from decimal import Decimal

from src.app.use_cases.billing.dtos import (
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
)
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def invoice_command(make_item):
    """Invoice totalling 200.00 with 10% discount and 18% tax"""
    return CreateInvoiceCommandDTO(
        patient_id="patient_1",
        items=[
            make_item("svc_1", quantity=1, unit_price="120.00"),
            make_item("svc_2", quantity=2, unit_price="40.00"),
        ],
        discount=Decimal("10"),
        tax_rate=Decimal("18"),
        notes="Follow-up in two weeks",
    )


@pytest.mark.asyncio
class TestCreateInvoice:
    """Test invoice creation"""

    async def test_create_invoice_computes_and_freezes_totals(
        self, store, invoice_command, clock
    ):
        """
        Given: Items totalling 200.00, 10% discount, 18% tax
        When: create_invoice is called
        Then: subtotal=200.00, total=212.40, issued_on=now, status unpaid
        """
        # Act
        result = await store.create_invoice(invoice_command)

        # Assert
        assert result.is_ok()
        invoice = store.get_invoice_by_id(result.value)
        assert invoice.subtotal == Decimal("200.00")
        assert invoice.total == Decimal("212.40")
        assert invoice.issued_on == clock.now
        assert invoice.status == InvoiceStatus.UNPAID
        assert invoice.paid_on is None
        assert invoice.notes == "Follow-up in two weeks"
        assert [i.service_id for i in invoice.items] == ["svc_1", "svc_2"]

    async def test_create_invoice_returns_new_unique_ids(self, store, invoice_command):
        first = await store.create_invoice(invoice_command)
        second = await store.create_invoice(invoice_command)

        assert first.value != second.value
        assert len(store.invoices) == 2

    async def test_create_invoice_tolerates_unknown_patient(self, store, invoice_command):
        result = await store.create_invoice(invoice_command)

        assert result.is_ok()
        assert store.get_patient_by_id("patient_1") is None


@pytest.mark.asyncio
class TestUpdateInvoice:
    """Test partial invoice updates"""

    async def test_update_notes_keeps_totals(self, store, invoice_command):
        invoice_id = (await store.create_invoice(invoice_command)).value

        result = await store.update_invoice(
            invoice_id, UpdateInvoiceCommandDTO(notes="Paid by card")
        )

        assert result.is_ok()
        invoice = store.get_invoice_by_id(invoice_id)
        assert invoice.notes == "Paid by card"
        assert invoice.total == Decimal("212.40")

    async def test_update_discount_recomputes_totals(self, store, invoice_command):
        """
        Given: An invoice with 10% discount and 18% tax on 200.00
        When: discount is changed to 0
        Then: total becomes 236.00
        """
        invoice_id = (await store.create_invoice(invoice_command)).value

        result = await store.update_invoice(
            invoice_id, UpdateInvoiceCommandDTO(discount=Decimal("0"))
        )

        assert result.is_ok()
        assert result.value.subtotal == Decimal("200.00")
        assert result.value.total == Decimal("236.00")

    async def test_update_items_recomputes_totals(
        self, store, invoice_command, make_item
    ):
        invoice_id = (await store.create_invoice(invoice_command)).value

        result = await store.update_invoice(
            invoice_id,
            UpdateInvoiceCommandDTO(items=[make_item("svc_3", quantity=1, unit_price="100.00")]),
        )

        invoice = store.get_invoice_by_id(invoice_id)
        assert result.is_ok()
        assert invoice.subtotal == Decimal("100.00")
        assert invoice.total == Decimal("106.20")

    async def test_update_does_not_change_id_or_issued_on(
        self, store, invoice_command, clock
    ):
        invoice_id = (await store.create_invoice(invoice_command)).value
        issued_on = store.get_invoice_by_id(invoice_id).issued_on
        clock.advance(days=1)

        await store.update_invoice(invoice_id, UpdateInvoiceCommandDTO(notes="x"))

        invoice = store.get_invoice_by_id(invoice_id)
        assert invoice.id == invoice_id
        assert invoice.issued_on == issued_on

    async def test_update_unknown_id_returns_not_found(self, store):
        result = await store.update_invoice("missing", UpdateInvoiceCommandDTO(notes="x"))

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
class TestMarkInvoicePaid:
    """Test unpaid -> paid transition"""

    async def test_mark_paid_sets_status_and_paid_on(self, store, invoice_command, clock):
        # Arrange
        invoice_id = (await store.create_invoice(invoice_command)).value
        paid_at = clock.advance(hours=2)

        # Act
        result = await store.mark_invoice_paid(invoice_id)

        # Assert
        assert result.is_ok()
        invoice = store.get_invoice_by_id(invoice_id)
        assert invoice.status == InvoiceStatus.PAID
        assert invoice.paid_on == paid_at
        assert invoice.total == Decimal("212.40")

    async def test_mark_paid_twice_restamps_paid_on(self, store, invoice_command, clock):
        """
        Given: An invoice already marked paid
        When: mark_invoice_paid is called again later
        Then: status stays paid and paid_on moves to the new time
        """
        invoice_id = (await store.create_invoice(invoice_command)).value
        first_paid_at = clock.advance(minutes=5)
        await store.mark_invoice_paid(invoice_id)
        second_paid_at = clock.advance(minutes=5)

        result = await store.mark_invoice_paid(invoice_id)

        assert result.is_ok()
        invoice = store.get_invoice_by_id(invoice_id)
        assert invoice.status == InvoiceStatus.PAID
        assert invoice.paid_on == second_paid_at
        assert invoice.paid_on != first_paid_at

    async def test_mark_paid_does_not_recompute_totals(self, store, invoice_command):
        invoice_id = (await store.create_invoice(invoice_command)).value
        store.invoices[0] = store.invoices[0].model_copy(update={"total": Decimal("1.00")})

        result = await store.mark_invoice_paid(invoice_id)

        assert result.value.total == Decimal("1.00")

    async def test_mark_paid_unknown_id_returns_not_found(self, store):
        result = await store.mark_invoice_paid("missing")

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
class TestDeleteAndQueryInvoices:
    """Test deletion and read-side queries"""

    async def test_delete_invoice(self, store, invoice_command):
        invoice_id = (await store.create_invoice(invoice_command)).value

        result = await store.delete_invoice(invoice_id)

        assert result.is_ok()
        assert store.get_invoice_by_id(invoice_id) is None

    async def test_delete_unknown_id_returns_not_found(self, store):
        result = await store.delete_invoice("missing")

        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_recent_invoices_newest_first(self, store, invoice_command, clock):
        ids = []
        for _ in range(7):
            ids.append((await store.create_invoice(invoice_command)).value)
            clock.advance(hours=1)

        recent = store.get_recent_invoices(limit=5)

        assert [i.id for i in recent] == list(reversed(ids))[:5]

    async def test_invoices_for_patient(self, store, invoice_command):
        await store.create_invoice(invoice_command)
        await store.create_invoice(invoice_command.model_copy(update={"patient_id": "other"}))

        assert len(store.get_invoices_for_patient("patient_1")) == 1
        assert store.get_invoices_for_patient("nobody") == []
