from .billing_data_repository import BillingDataRepository

__all__ = [
    "BillingDataRepository",
]
