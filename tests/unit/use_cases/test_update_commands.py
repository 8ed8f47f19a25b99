"""Unit tests for partial update command DTOs

Required fields may be left out of an update but never cleared, and
invoice status only changes through mark_invoice_paid.
"""

import pytest
from decimal import Decimal
from pydantic import ValidationError

from src.app.use_cases.billing.dtos import (
    UpdateInvoiceCommandDTO,
    UpdatePatientCommandDTO,
    UpdateServiceCommandDTO,
)


class TestUpdateCommandValidation:
    """Test rejection of cleared required fields"""

    @pytest.mark.parametrize("field", ["name", "phone", "age"])
    def test_patient_required_field_cannot_be_cleared(self, field):
        with pytest.raises(ValidationError):
            UpdatePatientCommandDTO(**{field: None})

    def test_patient_optional_fields_can_be_cleared(self):
        command = UpdatePatientCommandDTO(sex=None, notes=None)

        assert command.model_fields_set == {"sex", "notes"}

    def test_omitted_fields_are_not_set(self):
        command = UpdatePatientCommandDTO(phone="1112223333")

        assert command.model_fields_set == {"phone"}

    @pytest.mark.parametrize("field", ["name", "price"])
    def test_service_required_field_cannot_be_cleared(self, field):
        with pytest.raises(ValidationError):
            UpdateServiceCommandDTO(**{field: None})

    @pytest.mark.parametrize("field", ["patient_id", "items", "discount", "tax_rate"])
    def test_invoice_required_field_cannot_be_cleared(self, field):
        with pytest.raises(ValidationError):
            UpdateInvoiceCommandDTO(**{field: None})

    @pytest.mark.parametrize(
        "changes",
        [{"status": "unpaid"}, {"paid_on": None}, {"total": Decimal("1")}],
    )
    def test_invoice_status_and_totals_are_not_updatable(self, changes):
        with pytest.raises(ValidationError):
            UpdateInvoiceCommandDTO(**changes)


@pytest.mark.asyncio
class TestUpdateKeepsStoreReadable:
    """Test that a rejected update leaves the store searchable and loadable"""

    async def test_patient_keeps_name_after_rejected_clear(
        self, store, patient_command, repository
    ):
        """
        Given: A stored patient
        When: An update tries to clear the name
        Then: The command is rejected, search still works and data reloads
        """
        # Arrange
        patient = (await store.add_patient(patient_command)).value

        # Act
        with pytest.raises(ValidationError):
            await store.update_patient(patient.id, UpdatePatientCommandDTO(name=None))

        # Assert
        assert [p.name for p in store.search_patients("john")] == ["John Smith"]
        reloaded = await repository.load()
        assert reloaded.is_ok()
        assert reloaded.value.patients[0].name == "John Smith"
