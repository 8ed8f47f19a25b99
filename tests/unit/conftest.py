import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return
from src.adapter.repositories.billing_data_repository import KeyValueBillingDataRepository
from src.adapter.services.key_value_store import InMemoryKeyValueStore
from src.app.use_cases.billing.billing_store import BillingStore
from src.app.use_cases.billing.dtos import (
    CreatePatientCommandDTO,
    CreateServiceCommandDTO,
)
from src.domain.billing_snapshot import BillingSnapshot
from src.domain.invoice import InvoiceItem
from src.domain.invoice_document import ClinicInfo


class FakeClock:
    """Deterministic clock; advance() moves time forward"""

    def __init__(self, start: datetime = datetime(2024, 3, 15, 10, 30, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    """Fixed clock starting 2024-03-15 10:30 (a Friday)"""
    return FakeClock()


@pytest.fixture
def kv_store():
    """Empty in-memory key-value store"""
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(kv_store):
    """Billing data repository over the in-memory key-value store"""
    return KeyValueBillingDataRepository(kv_store)


@pytest_asyncio.fixture
async def store(repository, clock):
    """Empty, loaded BillingStore persisting to memory"""
    store = BillingStore(repository, clock=clock)
    await store.load()
    return store


@pytest.fixture
def mock_repository():
    """Mock repository that loads empty data and saves successfully"""
    repo = MagicMock()
    repo.load = AsyncMock(return_value=Return.ok(BillingSnapshot()))
    repo.save = AsyncMock(return_value=Return.ok(None))
    return repo


@pytest.fixture
def patient_command():
    return CreatePatientCommandDTO(
        name="John Smith",
        phone="9876543210",
        age=42,
        sex="M",
        notes="Lower back pain",
    )


@pytest.fixture
def service_command():
    return CreateServiceCommandDTO(
        name="Ultrasound Therapy",
        price=Decimal("500.00"),
        description="20 minute session",
    )


@pytest.fixture
def clinic_info():
    return ClinicInfo(
        name="Physiotherapy Clinic",
        address="123 Health Street, Medical District, City - 123456",
        phone="+91 98765 43210",
        email="info@physioclinic.com",
    )


@pytest.fixture
def make_item():
    """Factory for invoice items"""
    def _make_item(service_id: str = "svc_1", quantity: int = 1, unit_price: str = "100.00") -> InvoiceItem:
        return InvoiceItem(
            service_id=service_id, quantity=quantity, unit_price=Decimal(unit_price)
        )
    return _make_item
