import pytest_asyncio
from src.adapter.repositories.billing_data_repository import KeyValueBillingDataRepository
from src.adapter.services.key_value_store import SqlAlchemyKeyValueStore
from src.app.use_cases.billing.billing_store import BillingStore
from src.depends import create_engine, create_session_factory, init_db


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create test database engine on a temporary SQLite file"""
    db_path = tmp_path / "physio_billing_test.db"
    engine = create_engine(f"sqlite+aiosqlite:///{db_path}")

    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def kv_store(engine):
    """Durable key-value store over the test database"""
    return SqlAlchemyKeyValueStore(create_session_factory(engine))


@pytest_asyncio.fixture
async def store_factory(kv_store):
    """Build and load a fresh BillingStore over the same database"""
    async def _create_store() -> BillingStore:
        store = BillingStore(KeyValueBillingDataRepository(kv_store))
        result = await store.load()
        assert result.is_ok()
        return store
    return _create_store
