"""Billing Data Repository Interface

Defines the contract for loading and saving the billing collections.
"""

from abc import ABC, abstractmethod
from libs.result import Result
from src.domain.billing_snapshot import BillingSnapshot


class BillingDataRepository(ABC):
    """
    Repository interface for the patients, services and invoices collections

    Each collection is persisted as a whole under its own key.
    """

    @abstractmethod
    async def load(self) -> Result[BillingSnapshot]:
        """
        Load all three collections

        Missing collections load as empty lists. A read or decode failure is
        returned as an error; partial data is never returned.

        Returns:
            Result[BillingSnapshot]
        """
        pass

    @abstractmethod
    async def save(self, snapshot: BillingSnapshot) -> Result[None]:
        """
        Persist all three collections

        Every collection is written even if another one fails.

        Args:
            snapshot: Collections to persist

        Returns:
            Result[None]: ok, or an error naming the keys that failed
        """
        pass
