"""Key-Value Billing Data Repository

Serializes the billing collections to JSON blobs in a KeyValueStore.
"""

import asyncio
import logging
from typing import List
from pydantic import TypeAdapter
from libs.result import Result, Return, Error
from src.app.repositories.billing_data_repository import BillingDataRepository
from src.app.services.key_value_store import KeyValueStore
from src.domain.billing_snapshot import BillingSnapshot
from src.domain.invoice import Invoice
from src.domain.patient import Patient
from src.domain.service import Service

logger = logging.getLogger(__name__)

PATIENTS_KEY = "physio_patients"
SERVICES_KEY = "physio_services"
INVOICES_KEY = "physio_invoices"

patients_adapter = TypeAdapter(List[Patient])
services_adapter = TypeAdapter(List[Service])
invoices_adapter = TypeAdapter(List[Invoice])


class KeyValueBillingDataRepository(BillingDataRepository):
    """
    KeyValueStore implementation of BillingDataRepository

    Storage format: one JSON array per collection, camelCase field names,
    datetimes as ISO-8601 strings and amounts as decimal strings. Datetimes
    are parsed back into datetime objects on load.
    """

    def __init__(self, kv_store: KeyValueStore):
        self.kv_store = kv_store

    async def load(self) -> Result[BillingSnapshot]:
        """
        Load all three collections

        Returns:
            Result[BillingSnapshot]: collections, or LOAD_FAILED error
        """
        try:
            patients_data, services_data, invoices_data = await asyncio.gather(
                self.kv_store.get_item(PATIENTS_KEY),
                self.kv_store.get_item(SERVICES_KEY),
                self.kv_store.get_item(INVOICES_KEY),
            )

            snapshot = BillingSnapshot(
                patients=patients_adapter.validate_json(patients_data) if patients_data else [],
                services=services_adapter.validate_json(services_data) if services_data else [],
                invoices=invoices_adapter.validate_json(invoices_data) if invoices_data else [],
            )

        except Exception as e:
            logger.error(f"Failed to load billing data: {e}")
            return Return.err(
                Error(
                    code="LOAD_FAILED",
                    message="Failed to load billing data",
                    reason=str(e),
                )
            )

        logger.info(
            f"Loaded {len(snapshot.patients)} patients, "
            f"{len(snapshot.services)} services, "
            f"{len(snapshot.invoices)} invoices"
        )
        return Return.ok(snapshot)

    async def save(self, snapshot: BillingSnapshot) -> Result[None]:
        """
        Persist all three collections

        Args:
            snapshot: Collections to persist

        Returns:
            Result[None]: ok, or SAVE_FAILED error naming the failed keys
        """
        try:
            blobs = [
                (PATIENTS_KEY, patients_adapter.dump_json(snapshot.patients, by_alias=True)),
                (SERVICES_KEY, services_adapter.dump_json(snapshot.services, by_alias=True)),
                (INVOICES_KEY, invoices_adapter.dump_json(snapshot.invoices, by_alias=True)),
            ]
        except Exception as e:
            logger.error(f"Failed to serialize billing data: {e}")
            return Return.err(
                Error(
                    code="SAVE_FAILED",
                    message="Failed to serialize billing data",
                    reason=str(e),
                )
            )

        failures = []
        for key, blob in blobs:
            try:
                await self.kv_store.set_item(key, blob.decode("utf-8"))
            except Exception as e:
                logger.error(f"Failed to save {key}: {e}")
                failures.append((key, str(e)))

        if failures:
            failed_keys = ", ".join(key for key, _ in failures)
            return Return.err(
                Error(
                    code="SAVE_FAILED",
                    message=f"Failed to save billing data for: {failed_keys}",
                    reason="; ".join(f"{key}: {reason}" for key, reason in failures),
                )
            )

        return Return.ok(None)
