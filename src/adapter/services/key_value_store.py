"""Key-Value Store Implementations

SQLAlchemy-backed durable store and an in-memory store.
"""

from typing import Dict, Optional
from sqlalchemy.orm import sessionmaker
from sqlmodel import select
from src.app.services.key_value_store import KeyValueStore
from src.domain.storage_entry import StorageEntry, utc_now


class SqlAlchemyKeyValueStore(KeyValueStore):
    """
    SQLAlchemy implementation of KeyValueStore

    Each key is a row of the storage_entries table. Every call opens its own
    session and commits, so keys are written independently.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the blob stored under key

        Args:
            key: Storage key

        Returns:
            Stored text if present, None otherwise
        """
        async with self.session_factory() as session:
            statement = select(StorageEntry).where(StorageEntry.key == key)
            result = await session.exec(statement)
            entry = result.first()
            return entry.value if entry else None

    async def set_item(self, key: str, value: str) -> None:
        """
        Insert or replace the blob stored under key

        Args:
            key: Storage key
            value: Text to store
        """
        async with self.session_factory() as session:
            statement = select(StorageEntry).where(StorageEntry.key == key)
            result = await session.exec(statement)
            entry = result.first()

            if entry:
                entry.value = value
                entry.updated_at = utc_now()
            else:
                entry = StorageEntry(key=key, value=value)

            session.add(entry)
            await session.commit()


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local KeyValueStore

    Useful for tests and previews; contents are lost on exit.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
